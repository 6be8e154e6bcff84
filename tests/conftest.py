from collections.abc import Callable

import pytest

from rxsync.batch.models import SourceFile
from rxsync.batch.scheduler import BaseScheduler, ScheduledTask
from rxsync.config.settings import Settings


class ManualTask(ScheduledTask):
    def __init__(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self.delay_seconds = delay_seconds
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(BaseScheduler):
    """Scheduler that only fires callbacks when the test says so."""

    def __init__(self) -> None:
        self.tasks: list[ManualTask] = []

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ManualTask(delay_seconds, callback)
        self.tasks.append(task)
        return task

    def pending(self) -> list[ManualTask]:
        return [t for t in self.tasks if not t.cancelled and not t.fired]

    def fire(self, delay_seconds: float) -> None:
        """Fire every live task scheduled with exactly ``delay_seconds``."""
        for task in self.pending():
            if task.delay_seconds == delay_seconds:
                task.fired = True
                task.callback()

    def fire_all(self) -> None:
        for task in self.pending():
            task.fired = True
            task.callback()


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        extraction_provider="example",
        results_delay_seconds=0.8,
        failure_policy="abort",
    )


def make_file(name: str = "scan.png", content: bytes = b"\x89PNG fake") -> SourceFile:
    return SourceFile(filename=name, content=content)


def medical_document(
    *,
    order_id: str = "RX-1001",
    patient: str = "Jane Doe",
    dob: str = "1980-02-14",
    gender: str = "F",
    doctor: str = "Alan Smith",
    license_number: str = "MD-4411",
    clinic: str = "Riverside Clinic",
    medicine: str = "Amoxicillin",
    dosage: str = "500mg",
    frequency: str = "3x daily",
    duration: str = "7 days",
    height: str = "170cm",
    weight: str = "65kg",
    blood_type: str = "O+",
    blood_pressure: str = "120/80",
) -> str:
    return (
        "<MedicalDocument>"
        f"<Patient><Name>{patient}</Name><DOB>{dob}</DOB><Gender>{gender}</Gender></Patient>"
        f"<Doctor><Name>{doctor}</Name><LicenseNumber>{license_number}</LicenseNumber>"
        f"<Clinic>{clinic}</Clinic></Doctor>"
        f"<Prescription><Medicine><Name>{medicine}</Name><Dosage>{dosage}</Dosage>"
        f"<Frequency>{frequency}</Frequency><Duration>{duration}</Duration></Medicine>"
        "</Prescription>"
        f"<Vitals><Height>{height}</Height><Weight>{weight}</Weight>"
        f"<BloodType>{blood_type}</BloodType><BloodPressure>{blood_pressure}</BloodPressure>"
        "</Vitals>"
        f"<Notes>Order ID: {order_id}</Notes>"
        "</MedicalDocument>"
    )
