# services/statistics_service.py
from dataclasses import dataclass, asdict

from ..models.contact import Contact, LeadStatus
from ..models.equipment import Equipment
from ..models.job import SolarJob, JobStatus
from ..stores import ModelStore


@dataclass(frozen=True)
class JobStatistics:
    total_jobs: int
    pending: int
    in_progress: int
    completed: int
    cancelled: int
    total_revenue: float
    average_system_size: float

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class EquipmentStatistics:
    total_items: int
    total_value: float
    low_stock_items: int
    categories: int

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class CustomerStatistics:
    total_customers: int
    new_leads: int
    qualified_leads: int
    proposal_sent: int
    closed_won: int
    closed_lost: int
    conversion_rate: float

    def to_dict(self):
        return asdict(self)


def job_statistics(jobs) -> JobStatistics:
    jobs = list(jobs)

    def count(status):
        return sum(1 for job in jobs if job.status == status)

    total_revenue = sum(job.estimated_revenue for job in jobs if job.status == JobStatus.COMPLETED)
    average_size = sum(job.system_size for job in jobs) / len(jobs) if jobs else 0.0
    return JobStatistics(
        total_jobs=len(jobs),
        pending=count(JobStatus.PENDING),
        in_progress=count(JobStatus.IN_PROGRESS),
        completed=count(JobStatus.COMPLETED),
        cancelled=count(JobStatus.CANCELLED),
        total_revenue=total_revenue,
        average_system_size=average_size
    )


def equipment_statistics(items) -> EquipmentStatistics:
    items = list(items)
    return EquipmentStatistics(
        total_items=len(items),
        total_value=sum(item.quantity * item.unit_cost for item in items),
        low_stock_items=sum(1 for item in items if item.is_low_stock),
        categories=len({item.category for item in items if item.category})
    )


def customer_statistics(contacts) -> CustomerStatistics:
    contacts = list(contacts)

    def count(status):
        return sum(1 for contact in contacts if contact.lead_status == status)

    total = len(contacts)
    won = count(LeadStatus.WON)
    return CustomerStatistics(
        total_customers=total,
        new_leads=count(LeadStatus.NEW_LEAD),
        qualified_leads=count(LeadStatus.QUALIFIED),
        proposal_sent=count(LeadStatus.PROPOSAL),
        closed_won=won,
        closed_lost=count(LeadStatus.LOST),
        conversion_rate=won / total if total else 0.0
    )


class StatisticsService:
    def __init__(self, owner):
        self.owner = owner

    def job_statistics(self) -> JobStatistics:
        return job_statistics(ModelStore(SolarJob, self.owner).query())

    def equipment_statistics(self) -> EquipmentStatistics:
        return equipment_statistics(ModelStore(Equipment, self.owner).query())

    def customer_statistics(self) -> CustomerStatistics:
        return customer_statistics(ModelStore(Contact, self.owner).query())
