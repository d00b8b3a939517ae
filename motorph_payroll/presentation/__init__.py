# motorph_payroll/presentation/__init__.py
