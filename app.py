import argparse
import json
import logging
import sys
import uuid

from flask import Flask, g, request, jsonify
from werkzeug.exceptions import HTTPException

from config import Config, CITY_DB_FILENAME, ASN_DB_FILENAME
from models.ip_record import ATTRIBUTION
from services.geo import LookupService
from services.exceptions import DatabaseOpenError, IPWhereError
from routes.api import api_bp, health_bp
from routes.frontend import frontend_bp
from utils.logger import setup_logger

logger = logging.getLogger("ipwhere")

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, OPTIONS',
    'Access-Control-Allow-Headers': 'Accept, Content-Type',
    'Access-Control-Expose-Headers': 'Link',
    'Access-Control-Max-Age': '300',
}


def create_app(lookup_service, headless=False, static_dir=None):
    """Application factory"""
    app = Flask(__name__, static_folder=None)
    app.json.sort_keys = False
    app.config['STATIC_DIR'] = str(static_dir or Config.STATIC_DIR)
    app.extensions['lookup_service'] = lookup_service

    # Register blueprints
    app.register_blueprint(api_bp)
    app.register_blueprint(health_bp)

    if not headless:
        app.register_blueprint(frontend_bp)

    @app.before_request
    def assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid.uuid4().hex
        if request.method == 'OPTIONS':
            return '', 204

    @app.after_request
    def add_headers(response):
        response.headers.update(CORS_HEADERS)
        request_id = g.get('request_id')
        if request_id:
            response.headers['X-Request-ID'] = request_id
        logger.info(
            '%s %s %s [%s]',
            request.method,
            request.path,
            response.status_code,
            request_id
        )
        return response

    @app.errorhandler(Exception)
    def handle_exception(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on %s", request.path)
        return jsonify({"error": "Internal server error", "attribution": ATTRIBUTION}), 500

    return app


def build_parser():
    parser = argparse.ArgumentParser(
        prog='ipwhere',
        description='IP geolocation lookup server (DB-IP databases)'
    )
    parser.add_argument('ip', nargs='?',
                        help='Look up this IP, print the result as JSON and exit')
    parser.add_argument('-l', '--listen', default='',
                        help='Address to listen on (default :8080)')
    parser.add_argument('-H', '--headless', action='store_true',
                        help='Run in headless mode (API only, no frontend)')
    parser.add_argument('--online', '--enable-online-features', dest='online',
                        action='store_true',
                        help='Enable online features (reverse DNS lookup)')
    parser.add_argument('--city-db', default='', help='Path to city MMDB database')
    parser.add_argument('--asn-db', default='', help='Path to ASN MMDB database')
    parser.add_argument('--dns-timeout', type=float, default=None,
                        help='Reverse DNS timeout in seconds (default 2)')
    return parser


def resolve_settings(args):
    """
    Merge command line flags over the environment configuration

    Returns:
        Dictionary of effective settings
    """
    return {
        'listen': args.listen or Config.LISTEN_ADDR,
        'headless': args.headless or Config.HEADLESS,
        'online': args.online or Config.ENABLE_ONLINE_FEATURES,
        'city_db': Config.find_database(args.city_db or Config.CITY_DB_PATH, CITY_DB_FILENAME),
        'asn_db': Config.find_database(args.asn_db or Config.ASN_DB_PATH, ASN_DB_FILENAME),
        'dns_timeout': args.dns_timeout if args.dns_timeout is not None else Config.DNS_TIMEOUT,
    }


def run_cli(lookup_service, ip):
    """
    Look up a single IP and print the full record

    Returns:
        Process exit code
    """
    try:
        record = lookup_service.lookup(ip)
    except IPWhereError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(record.to_dict(), indent=2))
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = resolve_settings(args)
    cli_mode = args.ip is not None

    setup_logger(Config.LOG_LEVEL if not cli_mode else 'WARNING')

    if not settings['city_db'] or not settings['asn_db']:
        print(
            "Database files not found. Please provide paths via --city-db and --asn-db "
            "flags or CITY_DB_PATH and ASN_DB_PATH environment variables",
            file=sys.stderr
        )
        return 1

    if not cli_mode:
        logger.info("Using city database: %s", settings['city_db'])
        logger.info("Using ASN database: %s", settings['asn_db'])

    try:
        lookup_service = LookupService(
            settings['city_db'],
            settings['asn_db'],
            enable_online_features=settings['online'],
            dns_timeout=settings['dns_timeout']
        )
    except DatabaseOpenError as e:
        print(f"Error: failed to initialize geo reader: {e}", file=sys.stderr)
        return 1

    with lookup_service:
        if cli_mode:
            return run_cli(lookup_service, args.ip)

        try:
            host, port = Config.parse_listen_addr(settings['listen'])
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        app = create_app(lookup_service, headless=settings['headless'])

        if settings['headless']:
            logger.info("Running in headless mode (API only)")
        else:
            logger.info("Frontend enabled")

        logger.info("Starting server on %s", settings['listen'])
        app.run(host=host, port=port, threaded=True)

    return 0


if __name__ == '__main__':
    sys.exit(main())
