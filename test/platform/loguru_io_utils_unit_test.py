import pytest

from src.platform.logging.loguru_io_utils import (
    MAX_CONTENT_LENGTH,
    mask_sensitive,
    should_mask_keyword,
    truncate_content,
)


@pytest.mark.unit
class TestMaskSensitive:
    @pytest.mark.parametrize(
        'raw',
        [
            "{'authorization': 'Bearer abc123'}",
            'token=abc123',
            '"password": "hunter2"',
            "{'card_number': '4111111111111111'}",
        ],
    )
    def test_masks_secret_values(self, raw: str) -> None:
        masked = mask_sensitive(raw)

        assert '********' in masked
        for secret in ('abc123', 'hunter2', '4111111111111111'):
            assert secret not in masked

    def test_leaves_plain_data_untouched(self) -> None:
        data = {'reservation_id': 10, 'amount': '99.99'}

        assert mask_sensitive(data) is data

    def test_keyword_masking(self) -> None:
        assert should_mask_keyword('Authorization', 'Bearer x') == '********'
        assert should_mask_keyword('quantity', 3) == 3


@pytest.mark.unit
class TestTruncateContent:
    def test_long_strings_are_truncated(self) -> None:
        text = 'x' * (MAX_CONTENT_LENGTH + 5)

        assert truncate_content(text).endswith('...(truncated 5 chars)')

    def test_short_values_pass_through(self) -> None:
        assert truncate_content('short') == 'short'
        assert truncate_content(42) == 42
