"""Django project package for databar-kpi."""
