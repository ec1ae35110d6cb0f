from decimal import Decimal
from typing import Any

from fastapi.testclient import TestClient
import httpx
import pytest

from src.service.events.app.interface.i_partner_pricing_gateway import IPartnerPricingGateway
from src.service.events.driven_adapter.gateway.partner_pricing_gateway_impl import (
    PartnerPricingGatewayImpl,
)


pytestmark = pytest.mark.api


def _reserve_url(seeded_event: Any, spot_name: str) -> str:
    spot_id = seeded_event.spots[spot_name].id
    return f'/api/events/{seeded_event.event.id}/spots/{spot_id}/reserve'


class TestCommonEndpoints:
    def test_health(self, client: TestClient) -> None:
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    def test_metrics(self, client: TestClient) -> None:
        response = client.get('/metrics')

        assert response.status_code == 200
        assert 'text/plain' in response.headers['content-type']


class TestListAndGetEvents:
    def test_list_events(self, client: TestClient, seeded_event: Any) -> None:
        response = client.get('/api/events')

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 1
        assert body[0]['id'] == seeded_event.event.id
        assert body[0]['name'] == 'E1'
        assert body[0]['date'] == '2025-07-12 20:00:00'
        assert body[0]['rating'] == 'four_star'
        assert [spot['name'] for spot in body[0]['spots']] == ['A1', 'A3', 'B2']
        assert body[0]['tickets'] == []

    def test_get_event(self, client: TestClient, seeded_event: Any) -> None:
        response = client.get(f'/api/events/{seeded_event.event.id}')

        assert response.status_code == 200
        assert response.json()['id'] == seeded_event.event.id
        assert Decimal(response.json()['price']) == Decimal('120')

    def test_get_unknown_event_returns_404(self, client: TestClient) -> None:
        response = client.get('/api/events/missing')

        assert response.status_code == 404
        assert response.json() == {'detail': 'event not found', 'kind': 'not_found'}

    def test_list_spots(self, client: TestClient, seeded_event: Any) -> None:
        response = client.get(f'/api/events/{seeded_event.event.id}/spots')

        assert response.status_code == 200
        spots = response.json()
        assert [spot['name'] for spot in spots] == ['A1', 'A3', 'B2']
        assert all(spot['status'] == 'available' and spot['ticket_id'] == '' for spot in spots)

    def test_list_spots_of_unknown_event_returns_404(self, client: TestClient) -> None:
        response = client.get('/api/events/missing/spots')

        assert response.status_code == 404
        assert response.json()['kind'] == 'not_found'


class TestReserveSpot:
    def test_reserve_defaults_to_full_ticket(self, client: TestClient, seeded_event: Any) -> None:
        # Act
        response = client.post(_reserve_url(seeded_event, 'A1'))

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body['spot']['status'] == 'sold'
        assert body['spot']['ticket_id'] == body['ticket']['id']
        assert body['ticket']['spot_id'] == seeded_event.spots['A1'].id
        assert body['ticket']['ticket_type'] == 'full'
        assert Decimal(body['ticket']['price']) == Decimal('120')

    def test_reserve_half_ticket(self, client: TestClient, seeded_event: Any) -> None:
        response = client.post(_reserve_url(seeded_event, 'B2'), json={'ticket_type': 'half'})

        assert response.status_code == 200
        assert response.json()['ticket']['ticket_type'] == 'half'
        assert Decimal(response.json()['ticket']['price']) == Decimal('60')

    def test_scenario_sold_spot_conflicts_and_other_spot_succeeds(
        self, client: TestClient, seeded_event: Any
    ) -> None:
        # Arrange
        first = client.post(_reserve_url(seeded_event, 'A1'))
        assert first.status_code == 200
        ticket_id = first.json()['ticket']['id']

        # Act
        again = client.post(_reserve_url(seeded_event, 'A1'))
        other = client.post(_reserve_url(seeded_event, 'B2'))

        # Assert
        assert again.status_code == 409
        assert again.json() == {'detail': 'spot is already reserved', 'kind': 'conflict'}
        assert other.status_code == 200

        event = client.get(f'/api/events/{seeded_event.event.id}').json()
        spots = {spot['name']: spot for spot in event['spots']}
        assert spots['A1']['ticket_id'] == ticket_id
        assert spots['A3']['status'] == 'available'
        assert len(event['tickets']) == 2

    def test_reserve_unknown_spot_returns_404(self, client: TestClient, seeded_event: Any) -> None:
        response = client.post(f'/api/events/{seeded_event.event.id}/spots/missing/reserve')

        assert response.status_code == 404
        assert response.json() == {'detail': 'spot not found', 'kind': 'not_found'}

    def test_invalid_ticket_type_returns_400(self, client: TestClient, seeded_event: Any) -> None:
        response = client.post(_reserve_url(seeded_event, 'A1'), json={'ticket_type': 'vip'})

        assert response.status_code == 400
        assert response.json()['kind'] == 'validation_error'

        spots = client.get(f'/api/events/{seeded_event.event.id}/spots').json()
        assert all(spot['status'] == 'available' for spot in spots)


class TestReserveSpotWithPartnerPricing:
    @pytest.fixture
    def partner_pricing_gateway(self) -> IPartnerPricingGateway:
        return PartnerPricingGatewayImpl(
            base_urls={1: 'http://partner-one.test'},
            timeout=1.0,
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, json={'price': '80.00'})
            ),
        )

    def test_partner_quote_sets_ticket_price(self, client: TestClient, seeded_event: Any) -> None:
        response = client.post(_reserve_url(seeded_event, 'A1'), json={'ticket_type': 'half'})

        assert response.status_code == 200
        assert Decimal(response.json()['ticket']['price']) == Decimal('40')


class TestReserveSpotWithPartnerDown:
    @pytest.fixture
    def partner_pricing_gateway(self) -> IPartnerPricingGateway:
        return PartnerPricingGatewayImpl(
            base_urls={1: 'http://partner-one.test'},
            timeout=1.0,
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )

    def test_partner_failure_returns_503(self, client: TestClient, seeded_event: Any) -> None:
        # Act
        response = client.post(_reserve_url(seeded_event, 'A1'))

        # Assert
        assert response.status_code == 503
        assert response.json()['kind'] == 'service_unavailable'

        spots = client.get(f'/api/events/{seeded_event.event.id}/spots').json()
        assert spots[0]['name'] == 'A1'
        assert spots[0]['status'] == 'available'
