from prometheus_client import Counter, Histogram


class ReservationMetrics:
    """
    Event Spot Sales Metrics Collector

    Tracks reservation outcomes and partner pricing calls
    """

    def __init__(self) -> None:
        # ========== Spot Reservation Business Metrics ==========
        self.spot_reservation_requests = Counter(
            'spot_reservation_requests_total',
            'Total spot reservation requests',
            ['ticket_type', 'result'],  # result: success/conflict/not_found/...
        )

        self.spot_reservation_duration = Histogram(
            'spot_reservation_duration_seconds',
            'Spot reservation processing time',
            ['result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0],
        )

        self.spots_created = Counter(
            'spots_created_total',
            'Spots generated for events',
        )

        # ========== Partner Pricing Metrics ==========
        self.partner_price_quotes = Counter(
            'partner_price_quotes_total',
            'Partner pricing lookups',
            ['partner_id', 'result'],  # result: success/unavailable
        )

    # ========== Helper Methods ==========

    def record_spot_reservation(self, *, ticket_type: str, result: str, duration: float) -> None:
        self.spot_reservation_requests.labels(ticket_type=ticket_type, result=result).inc()

        self.spot_reservation_duration.labels(result=result).observe(duration)

    def record_spots_created(self, *, count: int) -> None:
        self.spots_created.inc(count)

    def record_partner_price_quote(self, *, partner_id: int, result: str) -> None:
        self.partner_price_quotes.labels(partner_id=str(partner_id), result=result).inc()


# Global metrics instance
metrics = ReservationMetrics()
