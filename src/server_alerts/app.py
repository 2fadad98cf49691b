from server_alerts.alert_sink import AlertSink, install_sink
from server_alerts.config import load_config
from server_alerts.utils.logger import get_logger, log
from server_alerts.utils.twilio_client import build_transport

logger = get_logger("server_alerts.app")

# Cold start: a bad ORIGINATOR/RECIPIENTS/credential raises here, so the
# container never serves a request.
config = load_config()
# LOG_LEVEL may be stricter than ALERT_LEVEL; the logger must still pass alerts on.
logger.setLevel(min(logger.level, config.threshold))
transport = build_transport(config.timeout_seconds)
sink = install_sink(logger, AlertSink(config, transport))

if config.self_test:
    logger.debug("This is a test at debug level.")
    logger.info("This is a test at info level.")
    logger.warning("This is a test at warning level.")
    logger.error("This is a test at error level.")


def _response(status_code: int) -> dict:
    return {"statusCode": status_code, "body": ""}


def index(event):
    return _response(200)


def simulate_error(event):
    logger.error("This should trigger error handling!")
    return _response(500)


ROUTES = {
    "/": index,
    "/simulateError": simulate_error,
}


def _request_line(event: dict):
    """
    Pull method and path out of an API Gateway event.

    HttpApi (v2) puts them under requestContext.http / rawPath;
    REST API (v1) uses httpMethod / path.
    """
    http = event.get("requestContext", {}).get("http", {})
    method = http.get("method") or event.get("httpMethod") or "GET"
    path = event.get("rawPath") or http.get("path") or event.get("path") or "/"
    return method.upper(), path


def lambda_handler(event, context):
    method, path = _request_line(event or {})
    log(
        "http.request",
        method=method,
        path=path,
        request_id=getattr(context, "aws_request_id", None),
    )

    route = ROUTES.get(path)
    if route is None:
        logger.info("http.not_found: path=%s", path)
        return _response(404)

    if method != "GET":
        logger.info("http.method_not_allowed: method=%s path=%s", method, path)
        return _response(405)

    return route(event)
