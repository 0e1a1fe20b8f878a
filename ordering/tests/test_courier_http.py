import json
import pathlib
import sys
import uuid
from decimal import Decimal

import pytest
import requests
import responses

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from ordering.app.domain import DeliveryOrderStatus  # noqa: E402
from ordering.app.providers import CourierClient  # noqa: E402
from ordering.app.services import DeliveryOrderService  # noqa: E402
from ordering.tests._seed import delivery_order  # noqa: E402

URL = "http://courier/api/delivery"


@responses.activate
def test_request_delivery_posts_order():
    responses.add(responses.POST, URL, json={}, status=200)
    order_id = uuid.uuid4()

    CourierClient(URL).request_delivery(order_id, Decimal(57_000), "12 Market Street")

    assert len(responses.calls) == 1
    body = json.loads(responses.calls[0].request.body)
    assert body == {"orderId": str(order_id), "price": "57000", "address": "12 Market Street"}


@responses.activate
def test_request_delivery_raises_on_error_status():
    responses.add(responses.POST, URL, json={"error": "no couriers"}, status=503)
    with pytest.raises(requests.HTTPError):
        CourierClient(URL).request_delivery(uuid.uuid4(), Decimal(1_000), "1 Side Road")


def test_unreachable_courier_keeps_order_waiting(delivery_repo, menu_repo):
    service = DeliveryOrderService(delivery_repo, menu_repo, CourierClient(URL, timeout=1))
    order_id = delivery_repo.save(delivery_order(DeliveryOrderStatus.WAITING)).id

    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, body=requests.ConnectionError("offline"))
        with pytest.raises(requests.ConnectionError):
            service.accept(order_id)

    assert delivery_repo.find_by_id(order_id).status == DeliveryOrderStatus.WAITING


def test_accept_over_http(delivery_repo, menu_repo):
    service = DeliveryOrderService(delivery_repo, menu_repo, CourierClient(URL))
    order_id = delivery_repo.save(delivery_order(DeliveryOrderStatus.WAITING)).id

    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, json={}, status=202)
        accepted = service.accept(order_id)
        sent = json.loads(rsps.calls[0].request.body)

    assert accepted.status == DeliveryOrderStatus.ACCEPTED
    assert sent["orderId"] == str(order_id)
    assert sent["price"] == "57000"
