from flask import Blueprint
from utils.response import json_response
from utils.datetime_helpers import utc_now, datetime_to_iso

health_bp = Blueprint("health", __name__, url_prefix="/api")


@health_bp.get("/healthcheck")
def healthcheck():
    return json_response(data={"status": "ok", "timestamp": datetime_to_iso(utc_now())})
