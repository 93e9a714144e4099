"""Employee attendance tracker.

Feature modules (users, attendance, reports) each have a model, a repository
interface with a MySQL implementation, a service and a thin Flask controller.
The attendance rules and report aggregators are pure functions.
"""

from .main import create_app

__all__ = ["create_app"]
