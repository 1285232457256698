from prometheus_client import Counter, Histogram


class ReservationMetrics:
    """
    Reservation / payment / release counters exposed on GET /metrics.
    """

    def __init__(self):
        # ========== Reservation ==========
        self.reservation_requests = Counter(
            'reservation_requests_total',
            'Total reservation attempts',
            ['result'],  # created/conflict/not_found/forbidden
        )

        self.reservation_duration = Histogram(
            'reservation_duration_seconds',
            'Reservation processing time',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        # ========== Payment ==========
        self.payment_attempts = Counter(
            'payment_attempts_total',
            'Total payment attempts',
            ['status'],  # completed/failed/rejected
        )

        # ========== Release ==========
        self.tickets_released = Counter(
            'tickets_released_total',
            'Tickets returned to inventory',
            ['kind'],  # partial/full
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, result: str, duration: float | None = None) -> None:
        self.reservation_requests.labels(result=result).inc()
        if duration is not None:
            self.reservation_duration.observe(duration)

    def record_payment(self, *, status: str) -> None:
        self.payment_attempts.labels(status=status).inc()

    def record_release(self, *, kind: str, count: int) -> None:
        if count > 0:
            self.tickets_released.labels(kind=kind).inc(count)


# Global metrics instance
metrics = ReservationMetrics()
