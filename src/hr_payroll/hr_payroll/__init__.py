"""HR payroll package.

Feature modules (shifts, attendance, leave, payroll) each carry their models,
repository protocols with MySQL implementations, services and a thin Flask
JSON controller layer.
"""
