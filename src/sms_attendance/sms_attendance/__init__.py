"""SMS Attendance package.

Organized by feature modules (actions, breaks, attendance, staff, audit)
with a thin Flask webhook layer over service/repository layers.
"""
