from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import AuthorizationError, DomainError, NotFoundError

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_endpoint(view):
    """Translate domain errors into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except DomainError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("unhandled error in %s", view.__name__)
            return json_error("Internal error while processing the request", 500)

    return wrapper
