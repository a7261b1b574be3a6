"""User management REST service.

Domain service enforcing uniqueness of email and login, age bounds and the
status lifecycle, exposed over FastAPI and backed by SQLModel.
"""

__version__ = "0.1.0"
