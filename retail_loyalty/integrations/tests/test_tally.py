from datetime import date
from decimal import Decimal
from xml.etree import ElementTree as ET

import pytest
import requests

from retail_loyalty.data.models import Voucher
from retail_loyalty.integrations.tally import TallyExporter, build_voucher_xml, push_to_tally


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")


@pytest.fixture
def voucher():
    return Voucher(voucher_date=date(2026, 10, 18), total_amount=Decimal("1250.50"), customer="Nair & Sons <Optics>")


@pytest.fixture
def sent(monkeypatch):
    calls = []

    def fake_post(url, data=None, headers=None, timeout=None):
        calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        return FakeResponse()

    monkeypatch.setattr("retail_loyalty.integrations.tally.requests.post", fake_post)
    return calls


def test_voucher_xml_layout(voucher):
    root = ET.fromstring(build_voucher_xml(voucher))
    assert root.tag == "ENVELOPE"
    assert root.findtext("HEADER/TALLYREQUEST") == "Import Data"
    assert root.findtext("BODY/IMPORTDATA/REQUESTDESC/REPORTNAME") == "Vouchers"

    entry = root.find("BODY/IMPORTDATA/REQUESTDATA/TALLYMESSAGE/VOUCHER")
    assert entry.findtext("DATE") == "20261018"
    assert entry.findtext("AMOUNT") == "1250.50"
    assert entry.findtext("PARTYNAME") == "Nair & Sons <Optics>"


def test_voucher_xml_declares_udf_namespace(voucher):
    assert '<TALLYMESSAGE xmlns:UDF="TallyUDF">' in build_voucher_xml(voucher)


def test_push_posts_xml(voucher, sent):
    assert push_to_tally(voucher, url="http://tally.local:9000", timeout=3) is True
    (call,) = sent
    assert call["url"] == "http://tally.local:9000"
    assert call["headers"] == {"Content-Type": "application/xml"}
    assert call["timeout"] == 3
    assert b"<PARTYNAME>Nair &amp; Sons &lt;Optics&gt;</PARTYNAME>" in call["data"]


def test_push_uses_configured_url(voucher, sent):
    push_to_tally(voucher)
    assert sent[0]["url"] == "http://localhost:9000"
    assert sent[0]["timeout"] == 10.0


@pytest.mark.parametrize(
    "error",
    [requests.ConnectionError("refused"), requests.Timeout("slow")],
)
def test_push_failure_is_reported_not_raised(voucher, monkeypatch, error):
    def fake_post(*args, **kwargs):
        raise error

    monkeypatch.setattr("retail_loyalty.integrations.tally.requests.post", fake_post)
    assert push_to_tally(voucher) is False


def test_push_http_error_is_reported_not_raised(voucher, monkeypatch):
    monkeypatch.setattr(
        "retail_loyalty.integrations.tally.requests.post", lambda *a, **k: FakeResponse(status_code=500)
    )
    assert push_to_tally(voucher) is False


def test_disabled_exporter_sends_nothing(voucher, sent):
    exporter = TallyExporter(enabled=False)
    assert exporter.submit(voucher) is None
    exporter.shutdown()
    assert sent == []


def test_enabled_exporter_pushes_in_background(voucher, sent):
    exporter = TallyExporter(url="http://tally.local:9000", enabled=True)
    future = exporter.submit(voucher)
    assert future.result(timeout=5) is True
    exporter.shutdown()
    assert sent[0]["url"] == "http://tally.local:9000"
