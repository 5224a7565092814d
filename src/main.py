# src/main.py

import logging
import os

from flask import Flask, jsonify, make_response, request, session

from config import FLASK_SECRET_KEY, LOG_LEVEL
from analysis_log import count_analyses as db_count_analyses
from analysis_log import export_csv as db_export_csv
from analysis_log import log_analysis
from fitzpatrick import QUESTIONS, Questionnaire, score_questionnaire
from models import InvalidInputError, ScoringError, SensitivityResult
from recommendations import format_analysis_html, get_recommendations
from reminder import Reminder, ReminderError
from uv_index import WeatherFetchError, fetch_weather_report, suggest_locations
from uv_risk import classify_uv_index

logger = logging.getLogger(__name__)

COLOR_SUCCESS = "#00B300"
COLOR_WARNING = "#FFA500"
COLOR_ERROR = "#FF0000"


def configure_logging(level=LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_flask_app():
    """Cria a aplicação Flask"""
    flask_app = Flask(__name__)
    flask_app.secret_key = FLASK_SECRET_KEY or os.urandom(24)
    return flask_app


app = create_flask_app()


def success(message, **payload):
    return jsonify(status="success", message=message, message_color=COLOR_SUCCESS, **payload)


def failure(message, status_code=400, **payload):
    response = jsonify(status="error", message=message, message_color=COLOR_ERROR, **payload)
    return response, status_code


def core_error(error, status_code=400):
    """Turn a typed InvalidInput/IncompleteAnswers/InvalidAnswer result into JSON."""
    return failure(error.message, status_code, error=error.model_dump())


def load_questionnaire():
    return Questionnaire.from_dict(session.get("questionnaire"))


def save_questionnaire(questionnaire):
    session["questionnaire"] = questionnaire.to_dict()


def questionnaire_payload(questionnaire):
    result = questionnaire.result()
    return {
        "state": questionnaire.state,
        "current": questionnaire.pending(),
        "answers": questionnaire.answers,
        "ready": questionnaire.is_ready(),
        "result": result.model_dump(mode="json") if isinstance(result, SensitivityResult) else None,
    }


def load_reminder():
    reminder = Reminder.from_dict(session.get("reminder"))
    if reminder.tick():
        session["reminder"] = reminder.to_dict()
    return reminder


@app.route("/")
def index():
    return success("UV protection advisor ready", questions=len(QUESTIONS))


@app.route("/weather", methods=["GET"])
def weather():
    location = request.args.get("location", "")
    try:
        report = fetch_weather_report(location)
    except WeatherFetchError as e:
        logger.warning("Weather pipeline failed at %s: %s", e.stage, e.detail)
        log_analysis("weather_failed", location, status_message=str(e))
        return failure(e.user_message, 502, stage=e.stage)

    risk = classify_uv_index(report.uv_index_raw)
    if isinstance(risk, InvalidInputError):
        return core_error(risk, 502)

    sensitivity = load_questionnaire().result()
    recs = get_recommendations(risk, sensitivity)
    log_analysis(
        "analysis_completed",
        ", ".join(p for p in (report.location.name, report.location.country) if p),
        uv_index=report.uv_index_raw,
        risk_tier=risk.tier.value,
        skin_type=sensitivity.skin_type.value if sensitivity else None,
        total_score=sensitivity.total_score if sensitivity else None,
        recommendations=recs,
        status_message="Analysis completed",
    )
    return success(
        "Weather loaded!",
        weather=report.model_dump(mode="json"),
        risk=risk.model_dump(mode="json"),
        skin=sensitivity.model_dump(mode="json") if sensitivity else None,
        recommendations=recs,
        result_html=format_analysis_html(risk, sensitivity, recs),
    )


@app.route("/locations", methods=["GET"])
def locations():
    matches = suggest_locations(request.args.get("q", ""))
    return success(f"{len(matches)} suggestion(s)", suggestions=[m.model_dump() for m in matches])


@app.route("/uv/classify", methods=["GET"])
def classify():
    raw = request.args.get("uv_index")
    try:
        value = float(raw) if raw is not None else None
    except ValueError:
        value = raw
    risk = classify_uv_index(value)
    if isinstance(risk, InvalidInputError):
        return core_error(risk)
    return success(risk.label, risk=risk.model_dump(mode="json"))


@app.route("/questionnaire", methods=["GET"])
def questionnaire_state():
    questionnaire = load_questionnaire()
    return success("Questionnaire", questions=QUESTIONS, **questionnaire_payload(questionnaire))


@app.route("/questionnaire/answer", methods=["POST"])
def questionnaire_answer():
    data = request.get_json(silent=True) or {}
    questionnaire = load_questionnaire()
    if questionnaire.is_complete:
        return failure("Questionnaire already finished. Reset to answer again.", 409)
    error = questionnaire.answer(data.get("answer"), data.get("question"))
    if error is not None:
        return core_error(error)
    save_questionnaire(questionnaire)
    return success("Answer saved", **questionnaire_payload(questionnaire))


@app.route("/questionnaire/next", methods=["POST"])
def questionnaire_next():
    questionnaire = load_questionnaire()
    questionnaire.next_question()
    save_questionnaire(questionnaire)
    return success("Next question", **questionnaire_payload(questionnaire))


@app.route("/questionnaire/previous", methods=["POST"])
def questionnaire_previous():
    questionnaire = load_questionnaire()
    questionnaire.previous_question()
    save_questionnaire(questionnaire)
    return success("Previous question", **questionnaire_payload(questionnaire))


@app.route("/questionnaire/result", methods=["POST"])
def questionnaire_result():
    questionnaire = load_questionnaire()
    result = questionnaire.show_result()
    if isinstance(result, ScoringError):
        return core_error(result)
    save_questionnaire(questionnaire)
    return success(result.label, **questionnaire_payload(questionnaire))


@app.route("/questionnaire/reset", methods=["POST"])
def questionnaire_reset():
    questionnaire = load_questionnaire()
    questionnaire.reset()
    save_questionnaire(questionnaire)
    return success("Questionnaire reset", **questionnaire_payload(questionnaire))


@app.route("/questionnaire/score", methods=["POST"])
def questionnaire_score():
    data = request.get_json(silent=True) or {}
    result = score_questionnaire(data.get("answers"))
    if isinstance(result, ScoringError):
        return core_error(result)
    return success(result.label, result=result.model_dump(mode="json"))


@app.route("/reminder", methods=["GET"])
def reminder_state():
    return success("Reminder", reminder=load_reminder().to_dict())


@app.route("/reminder", methods=["POST"])
def reminder_trigger():
    data = request.get_json(silent=True) or {}
    reminder = load_reminder()
    try:
        reminder.trigger(data.get("time"), data.get("timeout_seconds"))
    except ReminderError as e:
        return failure(str(e), 409 if reminder.is_notifying else 400)
    session["reminder"] = reminder.to_dict()
    return success("Reminder set!", reminder=reminder.to_dict())


@app.route("/reminder/dismiss", methods=["POST"])
def reminder_dismiss():
    reminder = load_reminder()
    dismissed = reminder.dismiss()
    session["reminder"] = reminder.to_dict()
    if not dismissed:
        return jsonify(
            status="warning",
            message="No reminder to dismiss",
            message_color=COLOR_WARNING,
            reminder=reminder.to_dict(),
        )
    return success("Reminder dismissed", reminder=reminder.to_dict())


@app.route("/count_analyses", methods=["GET"])
def count_analyses():
    """
    Retorna o total de registros no SQLite.
    """
    try:
        count = db_count_analyses()
    except Exception as e:
        logger.exception("count_analyses failed")
        return failure(str(e), 500, count=0)
    return jsonify(status="success", count=count)


@app.route("/export_csv", methods=["GET"])
def export_csv():
    filename, csv_data = db_export_csv()
    response = make_response(csv_data)
    response.headers["Content-Disposition"] = f"attachment; filename={filename}"
    response.headers["Content-Type"] = "text/csv; charset=utf-8"
    return response


# Alias para /export
@app.route("/export", methods=["GET"])
def export_alias():
    return export_csv()


if __name__ == "__main__":
    configure_logging()
    logger.info("Iniciando Flask em http://localhost:5000...")
    app.run(host="0.0.0.0", port=5000, debug=True)
