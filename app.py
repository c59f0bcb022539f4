from flask import Flask, request, jsonify, send_file, g
from werkzeug.exceptions import HTTPException
import io
import logging

import config
from logging_config import setup_logging, set_request_id
from questionnaire import find_question, get_schema, SCHEMAS
from questionnaire.answers import apply_action, progress_summary
from questionnaire.export import build_export, build_json_export, export_filename
from storage import get_store, validate_client_id
from storage.errors import IntakeError, NotFoundError, ValidationError

setup_logging(config.LOG_LEVEL, config.LOG_FILE)
logger = logging.getLogger("intake.api")

app = Flask(__name__)
app.config.setdefault('MAX_CONTENT_LENGTH', config.MAX_CONTENT_LENGTH)
app.config.setdefault('CLIENT_STORE', None)


def store():
    """The configured ClientStore, built on first use."""
    if app.config['CLIENT_STORE'] is None:
        app.config['CLIENT_STORE'] = get_store()
    return app.config['CLIENT_STORE']


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON")
    return data


def load_record(client_id):
    validate_client_id(client_id)
    record = store().read_client(client_id)
    if record is None:
        raise NotFoundError("Not found")
    return record


# ---- request plumbing ----

@app.before_request
def before():
    g.request_id = set_request_id(request.headers.get('X-Request-Id'))
    if request.method == 'OPTIONS':
        return '', 204


@app.after_request
def cors(resp):
    resp.headers['Access-Control-Allow-Origin'] = '*'
    resp.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
    resp.headers['Access-Control-Allow-Headers'] = 'Content-Type'
    return resp


@app.errorhandler(IntakeError)
def handle_intake_error(e):
    if e.status_code >= 500:
        logger.error(f"{request.method} {request.path}: {e}")
    return jsonify({"error": str(e)}), e.status_code


@app.errorhandler(HTTPException)
def handle_http_error(e):
    return jsonify({"error": e.description if e.code != 404 else "Not found"}), e.code


@app.errorhandler(Exception)
def handle_unexpected(e):
    logger.exception(f"API error on {request.method} {request.path}")
    return jsonify({"error": str(e)}), 500


# ---- clients ----

@app.route("/api/clients", methods=["GET"])
def list_clients():
    return jsonify([c.to_dict() for c in store().list_clients()])


@app.route("/api/clients", methods=["POST"])
def create_client():
    data = json_body()
    record = store().create_client(data.get("name"))
    return jsonify(record.to_dict()), 201


@app.route("/api/clients/<client_id>", methods=["GET"])
def get_client(client_id):
    return jsonify(load_record(client_id).to_dict())


@app.route("/api/clients/<client_id>", methods=["PUT"])
def update_client(client_id):
    validate_client_id(client_id)
    record = store().update_client(client_id, json_body())
    return jsonify(record.to_dict())


@app.route("/api/clients/<client_id>", methods=["DELETE"])
def delete_client(client_id):
    validate_client_id(client_id)
    store().delete_client(client_id)
    return jsonify({"deleted": client_id})


# ---- questionnaire ----

@app.route("/api/schemas", methods=["GET"])
def list_schemas():
    return jsonify(sorted(SCHEMAS))


@app.route("/api/schemas/<kind>", methods=["GET"])
def get_schema_definition(kind):
    return jsonify(get_schema(kind).to_dict())


@app.route("/api/clients/<client_id>/progress", methods=["GET"])
def client_progress(client_id):
    record = load_record(client_id)
    return jsonify({kind: progress_summary(schema, record.answers) for kind, schema in SCHEMAS.items()})


@app.route("/api/clients/<client_id>/answers/<question_id>", methods=["POST"])
def answer_action(client_id, question_id):
    """Apply one form interaction ({action, ...params}) to an answer and save."""
    record = load_record(client_id)
    _, question = find_question(question_id)
    if question is None:
        raise NotFoundError(f"Unknown question: {question_id}")

    params = json_body()
    action = params.pop("action", None)
    if not action:
        raise ValidationError("action required")
    answer = apply_action(question, record.answers.get(question_id), action, params)

    answers = dict(record.answers)
    answers[question_id] = answer.to_dict()
    saved = store().update_client(client_id, {"answers": answers})
    return jsonify({"questionId": question_id, "answer": answer.to_dict(), "updatedAt": saved.updated_at})


@app.route("/api/clients/<client_id>/export/<kind>/<fmt>", methods=["GET"])
def export_client(client_id, kind, fmt):
    record = load_record(client_id)
    schema = get_schema(kind)

    if fmt == "txt":
        body = build_export(schema, record)
        mimetype = "text/plain"
    elif fmt == "json":
        body = build_json_export(record)
        mimetype = "application/json"
    else:
        raise ValidationError(f"Unsupported format: {fmt}")

    output = io.BytesIO(body.encode("utf-8"))
    return send_file(output, mimetype=mimetype, as_attachment=True,
                     download_name=export_filename(schema.key, record, fmt))


if __name__ == "__main__":
    logger.info(f"Intake server running on http://{config.HOST}:{config.PORT} ({config.STORE_BACKEND} store)")
    app.run(host=config.HOST, port=config.PORT)
