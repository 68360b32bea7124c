"""TimeTrack package.

Employee time tracking organized by feature modules (timer, location,
records, clocking) with a thin Flask controller layer on top of plain
service/repository classes.
"""
