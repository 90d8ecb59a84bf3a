"""
ECG - health checks for Django

Intercepts a reserved path in the request pipeline, runs a configured set of
named checks and returns their aggregated status as JSON:

- Check registry and built-in checks (git revision, constants, migrations...)
- Middleware and URLconf view exposing the health endpoint
- Liveness ping path that never runs checks
"""

__version__ = "1.0.0"
