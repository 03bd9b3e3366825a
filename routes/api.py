import logging

from flask import Blueprint, current_app, request, jsonify

from models.ip_record import ATTRIBUTION
from services.exceptions import InvalidIPError, LookupFailedError
from services.projector import project
from utils.helpers import get_client_ip, debug_info

api_bp = Blueprint('api', __name__, url_prefix='/api')
health_bp = Blueprint('health', __name__)

logger = logging.getLogger("ipwhere.api")


def get_lookup_service():
    """Lookup service attached to the running app"""
    return current_app.extensions['lookup_service']


def error_response(message, status):
    """JSON error body; always carries the attribution"""
    return jsonify({"error": message, "attribution": ATTRIBUTION}), status


# ============================================================================
# IP Lookup Endpoint
# ============================================================================

@api_bp.route('/ip', methods=['GET'])
def ip_lookup():
    """
    Look up geolocation for the requesting IP or a given IP address

    Request:
        GET /api/ip?ip=x.x.x.x&return=country&return=city

        ip      IP address to lookup (defaults to client IP)
        return  Fields to return (repeatable): hostname, country, iso_code,
                in_eu, city, region, latitude, longitude, timezone, asn,
                organization

    Response:
        {
            "ip": "8.8.8.8",
            "country": "United States",
            "iso_code": "US",
            "city": "Mountain View",
            ...
            "attribution": "IP Geolocation by DB-IP (https://db-ip.com)"
        }
    """
    ip = request.args.get('ip', '').strip()
    if not ip:
        ip = get_client_ip(request.headers, request.remote_addr)

    try:
        record = get_lookup_service().lookup(ip)
    except InvalidIPError:
        return error_response("Invalid IP address", 400)
    except LookupFailedError as e:
        logger.error("Lookup failed for %s: %s", ip, e)
        return error_response("Failed to lookup IP", 500)

    return_fields = request.args.getlist('return')
    if return_fields:
        return jsonify(project(record, return_fields))

    return jsonify(record.to_dict())


# ============================================================================
# Service Information Endpoints
# ============================================================================

@api_bp.route('/features', methods=['GET'])
def features():
    """
    Enabled feature flags

    Response:
        {"onlineFeatures": false}
    """
    return jsonify({
        "onlineFeatures": get_lookup_service().online_features_enabled
    })


@api_bp.route('/debug', methods=['GET'])
def debug():
    """
    Request headers and connection info, for debugging proxy setups

    Response:
        {
            "remoteAddr": "...",
            "headers": {...},
            "xForwardedFor": "...",
            ...
            "detectedClientIP": "..."
        }
    """
    return jsonify(debug_info(
        request.headers,
        request.remote_addr,
        request.host,
        request.full_path.rstrip('?')
    ))


# ============================================================================
# Health Check Endpoint
# ============================================================================

@health_bp.route('/health', methods=['GET'])
def health():
    """
    Health check endpoint for monitoring

    Response:
        {"status": "ok"}
    """
    return jsonify({"status": "ok"})
