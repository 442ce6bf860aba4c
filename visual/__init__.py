"""Django app that renders the data bar and hosts its formatting service."""
