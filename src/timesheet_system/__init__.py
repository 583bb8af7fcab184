"""Daily Timesheet package.

Organized by feature modules (timeslots, activities, employees, activity_log, ...)
with a thin Flask controller layer over service/repository layers.
"""
