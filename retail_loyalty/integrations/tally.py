"""
One-way export of sales vouchers to Tally.

Tally accepts an XML "Import Data" envelope POSTed to its HTTP port. The push is
best effort: a failed push is logged and reported as False, never raised and
never retried, so the checkout that triggered it is not held up by the
accounting system.
"""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional
from xml.etree import ElementTree as ET

import requests

from ..config import get_config
from ..data.models import Voucher
from ..logging import get_logger

TALLY_DATE_FORMAT = "%Y%m%d"


def build_voucher_xml(voucher: Voucher) -> str:
    """Render a voucher as a Tally import envelope."""
    envelope = ET.Element("ENVELOPE")

    header = ET.SubElement(envelope, "HEADER")
    ET.SubElement(header, "TALLYREQUEST").text = "Import Data"

    body = ET.SubElement(envelope, "BODY")
    import_data = ET.SubElement(body, "IMPORTDATA")
    request_desc = ET.SubElement(import_data, "REQUESTDESC")
    ET.SubElement(request_desc, "REPORTNAME").text = "Vouchers"

    request_data = ET.SubElement(import_data, "REQUESTDATA")
    message = ET.SubElement(request_data, "TALLYMESSAGE", {"xmlns:UDF": "TallyUDF"})
    entry = ET.SubElement(message, "VOUCHER")
    ET.SubElement(entry, "DATE").text = voucher.voucher_date.strftime(TALLY_DATE_FORMAT)
    ET.SubElement(entry, "AMOUNT").text = str(voucher.total_amount)
    ET.SubElement(entry, "PARTYNAME").text = voucher.customer

    return ET.tostring(envelope, encoding="unicode")


def push_to_tally(voucher: Voucher, url: Optional[str] = None, timeout: Optional[float] = None) -> bool:
    """POST one voucher to Tally. Returns True on a 2xx response, False otherwise."""
    config = get_config()
    logger = get_logger(__name__)
    url = url or config.tally_url
    timeout = config.tally_timeout_seconds if timeout is None else timeout

    payload = build_voucher_xml(voucher)
    try:
        response = requests.post(
            url,
            data=payload.encode("utf-8"),
            headers={"Content-Type": "application/xml"},
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.exceptions.Timeout:
        logger.error(f"Error pushing to Tally: request timed out after {timeout} seconds")
        return False
    except requests.RequestException as e:
        logger.error(f"Error pushing to Tally: {e}")
        return False

    logger.info(f"Voucher for {voucher.customer} ({voucher.total_amount}) pushed to Tally")
    return True


class TallyExporter:
    """Fire-and-forget voucher submission on a small background pool."""

    def __init__(self, url: Optional[str] = None, enabled: Optional[bool] = None, max_workers: Optional[int] = None) -> None:
        config = get_config()
        self.url = url or config.tally_url
        self.enabled = config.tally_enabled if enabled is None else enabled
        self.logger = get_logger(__name__)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or config.tally_max_workers,
            thread_name_prefix="tally-export",
        )

    def submit(self, voucher: Voucher) -> Optional[Future]:
        """Queue a voucher for export. Returns None when the export is disabled."""
        if not self.enabled:
            self.logger.debug("Tally export disabled, voucher not sent")
            return None
        return self._executor.submit(push_to_tally, voucher, self.url)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
