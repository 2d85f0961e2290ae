"""Fiscal calendar services.

- calendar/: conversion engine between calendar dates and the corporate fiscal calendar
- exports/: CSV writers for calendar lookup tables
- api/: Flask HTTP front end
"""
