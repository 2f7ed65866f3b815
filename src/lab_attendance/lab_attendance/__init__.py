"""Lab Attendance package.

This package is organized by feature modules (rooms, attendance, reports, ...)
with a thin Flask controller layer and service/repository layers over an
in-memory entity store.
"""
