"""Example extraction client adapter.

Use this module as a reference when implementing new extraction backends.
Implement BaseExtractionClient and register the provider in ExtractionClientFactory.
"""

from typing import ClassVar

from rxsync.batch.models import SourceFile
from rxsync.extraction.base import BaseExtractionClient
from rxsync.extraction.models import ExtractionResult


class ExampleExtractionClient(BaseExtractionClient):
    """Example adapter that returns a fixed MedicalDocument for every image.

    No network calls. Useful for local development and tests.
    """

    RAW_TEXT: ClassVar[str] = (
        "Order ID: RX-0001\n"
        "Patient: Jane Doe  DOB: 1980-02-14  F\n"
        "Dr. Alan Smith  Lic. MD-4411  Riverside Clinic\n"
        "Amoxicillin 500mg  3x daily  7 days"
    )

    XML_TEMPLATE: ClassVar[str] = (
        "<MedicalDocument>"
        "<Patient><Name>Jane Doe</Name><DOB>1980-02-14</DOB><Gender>F</Gender></Patient>"
        "<Doctor><Name>Alan Smith</Name><LicenseNumber>MD-4411</LicenseNumber>"
        "<Clinic>Riverside Clinic</Clinic></Doctor>"
        "<Prescription><Medicine><Name>Amoxicillin</Name><Dosage>500mg</Dosage>"
        "<Frequency>3x daily</Frequency><Duration>7 days</Duration></Medicine></Prescription>"
        "<Vitals><Height>MISSING</Height><Weight>MISSING</Weight>"
        "<BloodType>UNREADABLE</BloodType><BloodPressure>120/80</BloodPressure></Vitals>"
        "<Notes>Order ID: {order_id}</Notes>"
        "</MedicalDocument>"
    )

    def __init__(self) -> None:
        self._calls = 0

    def extract(self, source_file: SourceFile) -> ExtractionResult:
        self._calls += 1
        order_id = f"RX-{self._calls:04d}"
        return ExtractionResult(
            raw_text=self.RAW_TEXT.replace("RX-0001", order_id),
            structured_output=self.XML_TEMPLATE.format(order_id=order_id),
        )
