"""
api/index.py
============
Serverless entry point: turns an API-gateway style event into a WSGI request
against the Dash (Flask) server and returns the gateway response dict.
"""
import base64

from werkzeug.middleware.proxy_fix import ProxyFix
from werkzeug.test import EnvironBuilder
from werkzeug.wrappers import Response

from app import server
from utils.logger import get_logger

log = get_logger()

server.wsgi_app = ProxyFix(server.wsgi_app)


def _request_body(event):
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body


def handler(event, context):
    path = event.get("path") or "/"
    method = event.get("httpMethod") or "GET"
    builder = EnvironBuilder(
        path=path,
        method=method,
        headers=event.get("headers") or {},
        query_string=event.get("queryStringParameters") or None,
        data=_request_body(event),
    )
    try:
        env = builder.get_environ()
    finally:
        builder.close()

    resp = Response.from_app(server.wsgi_app, env)
    log.debug("%s %s -> %d", method, path, resp.status_code)
    return {
        "statusCode": resp.status_code,
        "headers": dict(resp.headers),
        "body": resp.get_data(as_text=True),
    }
