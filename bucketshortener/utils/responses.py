"""API Gateway (Lambda proxy) response builders"""

import json


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def _json_response(status_code: int, body: dict, headers: dict | None = None) -> dict:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['error_code'] = error_code
    return body


def response_200(body: dict) -> dict:
    return _json_response(200, body)


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> dict:
    return _json_response(400, _error_body('Bad Request', message, error_code))


def response_404(message: str | None = None, error_code: str | None = None) -> dict:
    return _json_response(404, _error_body('Not Found', message, error_code))


def response_500(message: str | None = None, error_code: str | None = None) -> dict:
    return _json_response(500, _error_body('Internal Server Error', message, error_code))


def response_503(message: str | None = None, error_code: str | None = None) -> dict:
    return _json_response(503, _error_body('Service Unavailable', message, error_code))
