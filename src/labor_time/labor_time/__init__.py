"""Labor-time computation package.

Feature modules (schedules, punches, attendance, payroll, reports, ...) keep a
pure computation core; repositories and the Flask controllers are thin
adapters around it.
"""
