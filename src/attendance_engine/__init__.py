"""Attendance engine package.

This package is organized by feature modules (attendance, leave, reports, ...)
with a thin Flask controller layer over pure resolution logic and
repository-backed services.
"""
