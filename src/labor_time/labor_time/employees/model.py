from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: directory data consumed read-only by the views."""

    employee_id: int
    full_name: str
    site_id: Optional[int] = None
    is_active: bool = True
