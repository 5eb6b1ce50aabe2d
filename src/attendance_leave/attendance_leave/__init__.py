"""Attendance and leave-management backend.

This package is organized by feature modules (employees, attendance, leaves)
with a thin Flask controller layer over service/repository layers.
"""
