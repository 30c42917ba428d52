"""Project entity — the customer engagement positions belong to."""

from dataclasses import dataclass


@dataclass
class Project:
    id: str | None
    customer_id: str
    project_name: str
    sub_customer_id: str | None = None
    default_rotation: str | None = None
