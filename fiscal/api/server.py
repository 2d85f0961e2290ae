from __future__ import annotations
from datetime import date
from typing import Any
from flask import Flask, request, jsonify, Response
from fiscal.calendar.engine import calendar_rows, convert
from fiscal.calendar.errors import FiscalCalendarError, NotConfigured
from fiscal.calendar.table import CalendarTable, load_table
from fiscal.config.env import get_api_config
from fiscal.exports.writers import write_calendar

import json
import logging
import time
from collections import deque, defaultdict
from pathlib import Path

app = Flask(__name__)
logger = logging.getLogger(__name__)

OPENAPI_PATH = Path(__file__).with_name('openapi.json')

# Configuration helpers (overridable via app.config in tests)

def _get_api_key() -> str | None:
    if 'API_KEY' in app.config:
        return app.config.get('API_KEY')
    return get_api_config().api_key


def _get_rate_limit() -> tuple[int, float]:
    n = app.config.get('RATE_LIMIT_N')
    w = app.config.get('RATE_LIMIT_WINDOW_SEC')
    if n is None or w is None:
        cfg = get_api_config()
        n = cfg.rate_limit_n if n is None else n
        w = cfg.rate_limit_window_sec if w is None else w
    return int(n), float(w)


def _get_table() -> CalendarTable:
    table = app.config.get('CALENDAR_TABLE')
    return table if table is not None else load_table()

_recent: dict[str, deque[float]] = defaultdict(lambda: deque(maxlen=100))


def _client_ip() -> str:
    xff = request.headers.get('X-Forwarded-For')
    if xff:
        return xff.split(',')[0].strip()
    return request.remote_addr or 'anon'


def _check_api_key():
    api_key = _get_api_key()
    if api_key:
        provided = request.headers.get('X-API-Key')
        if provided != api_key:
            return jsonify({'error': 'unauthorized'}), 401
    return None


def _prune_idle(now: float, window: float) -> None:
    # forget clients with no request inside the window
    idle = [ip for ip, stamps in _recent.items() if not stamps or now - stamps[-1] > window]
    for ip in idle:
        del _recent[ip]


def _check_rate_limit(ip: str):
    n, window = _get_rate_limit()
    if n <= 0:
        return None
    now = time.time()
    _prune_idle(now, window)
    stamps = _recent[ip]
    while stamps and now - stamps[0] > window:
        stamps.popleft()
    if len(stamps) >= n:
        resp = jsonify({'error': 'rate_limited'})
        resp.status_code = 429
        resp.headers['Retry-After'] = f"{max(0.0, window - (now - stamps[0])):.2f}"
        return resp
    stamps.append(now)
    return None

@app.before_request
def _auth_and_rate_limit():
    # Only enforce for calendar routes; openapi.json stays public
    if request.path.startswith(('/convert', '/calendar')):
        unauthorized = _check_api_key()
        if unauthorized is not None:
            return unauthorized
        if request.method == 'POST' and request.path == '/convert':
            rl = _check_rate_limit(_client_ip())
            if rl is not None:
                return rl
    return None


@app.errorhandler(FiscalCalendarError)
def _calendar_error(e: FiscalCalendarError):
    if isinstance(e, NotConfigured):
        logger.error("calendar table misconfigured: %s", e)
        return jsonify({'error': e.kind, 'message': str(e)}), 500
    logger.warning("rejected %s %s: %s", request.method, request.path, e)
    return jsonify({'error': e.kind, 'message': str(e)}), 400


def _jsonable(v: Any) -> Any:
    if isinstance(v, list):
        return [_jsonable(x) for x in v]
    return v.isoformat() if isinstance(v, date) else v


@app.post('/convert')
def post_convert():
    payload = request.get_json(force=True, silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({'error': 'request body must be a JSON object'}), 400
    for field in ('input', 'from', 'to'):
        if payload.get(field) in (None, '', []):
            return jsonify({'error': f'{field} is required'}), 400
    result = convert(payload['input'], payload['from'], payload['to'], table=_get_table())
    return jsonify({'result': _jsonable(result)})


@app.get('/calendar.csv')
def get_calendar_csv():
    start = request.args.get('start')
    end = request.args.get('end')
    if not start or not end:
        return jsonify({'error': 'start and end are required'}), 400
    body = write_calendar(calendar_rows(start, end, table=_get_table()))
    return Response(body, mimetype='text/csv', headers={
        'Content-Disposition': f'attachment; filename="calendar_{start}_{end}.csv"'
    })


@app.get('/calendar/config')
def get_calendar_config():
    return jsonify(_get_table().to_dict())


@app.get('/openapi.json')
def get_openapi():
    try:
        spec = json.loads(OPENAPI_PATH.read_text())
    except (OSError, ValueError):
        return jsonify({'error': 'openapi_not_found'}), 404
    return jsonify(spec)


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=8000)
