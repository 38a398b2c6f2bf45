"""Attendance Ledger & Statistics Engine.

This package is organized by feature modules (attendance, sessions,
participants, statistics, bulk) with a thin Flask controller layer on top of
service/repository layers. Raw rows in either record shape pass through
``normalizer`` before any other code sees them.
"""
