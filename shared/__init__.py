"""
PMIS Shared Package
===================

Wire schemas shared by the PMIS API and its clients.
"""
