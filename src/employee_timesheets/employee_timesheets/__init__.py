"""Employee & timesheet records package.

Organized by feature modules (employees, timesheets, uploads) with a thin Flask
controller layer on top of service and repository layers.
"""
