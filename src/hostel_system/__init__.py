"""Hostel management system package.

This package is organized by feature modules (residents, rooms, allocations,
attendance, ...) with a thin Flask controller layer on top of service and
repository layers.
"""
