import io
from dataclasses import dataclass

from flask import Blueprint, Flask, current_app, jsonify, request, send_file
from flask_cors import CORS

from venture_backend.config import Config, log_level
from venture_backend.dashboard import aggregate
from venture_backend.errors import InvalidParameter, InvalidState, NotFound, VentureError
from venture_backend.ideas import IDEA_CATALOG, filter_from_payload
from venture_backend.logging_config import configure_logging, get_logger
from venture_backend.models import db
from venture_backend.parsing import parse_number
from venture_backend.projection import ProjectionInput, project
from venture_backend.storage import (
    PROJECT_NUMERIC,
    PROJECT_PATCHABLE,
    PROJECT_REQUIRED,
    Store,
    UuidIds,
    checked_patch,
)
from venture_backend.timing import (
    RUNNING,
    SystemClock,
    minutes_to_hours,
    stop_patch,
    tracked_minutes,
)
from venture_backend.trends import TREND_CATALOG, search_trends

logger = get_logger("api")

api = Blueprint("api", __name__, url_prefix="/api")


@dataclass
class Services:
    store: Store
    clock: object
    ids: object


def _services():
    return current_app.extensions["venture_backend"]


def _body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidParameter("request body must be a JSON object")
    return data


def _project_or_404(store, project_id):
    found = store.projects.get(project_id)
    if found is None:
        raise NotFound("Project", project_id)
    return found


def _with_tasks(store, found):
    found["tasks"] = store.tasks.list(projectId=found["id"])
    return found


# ==================== Projects ====================

@api.route("/projects", methods=["GET"])
def get_projects():
    store = _services().store
    return jsonify([_with_tasks(store, p) for p in store.projects.list()])


@api.route("/projects", methods=["POST"])
def create_project():
    services = _services()
    data = _body()
    if not data.get("name"):
        raise InvalidParameter("name is required")
    created = services.store.projects.insert({
        "id": services.ids(),
        "name": data["name"],
        "description": data.get("description"),
        "status": data.get("status") or "Planning",
        "startDate": data.get("startDate"),
        "endDate": data.get("endDate"),
        "budget": parse_number("budget", data.get("budget") or 0),
        "createdAt": services.clock.now().isoformat(),
    })
    logger.info("project created", extra={"project_id": created["id"]})
    return jsonify(_with_tasks(services.store, created))


@api.route("/projects/<project_id>", methods=["PUT"])
def update_project(project_id):
    store = _services().store
    patch = checked_patch(_body(), PROJECT_PATCHABLE, PROJECT_REQUIRED, PROJECT_NUMERIC)
    _project_or_404(store, project_id)
    updated = store.projects.update(project_id, patch)
    if updated is None:
        raise NotFound("Project", project_id)
    return jsonify(_with_tasks(store, updated))


@api.route("/projects/<project_id>", methods=["DELETE"])
def delete_project(project_id):
    store = _services().store
    _project_or_404(store, project_id)
    for task in store.tasks.list(projectId=project_id):
        store.tasks.delete(task["id"])
    if not store.projects.delete(project_id):
        raise NotFound("Project", project_id)
    logger.info("project deleted", extra={"project_id": project_id})
    return jsonify({"success": True})


@api.route("/projects/<project_id>/tasks", methods=["POST"])
def add_task(project_id):
    services = _services()
    data = _body()
    _project_or_404(services.store, project_id)
    if not data.get("title"):
        raise InvalidParameter("title is required")
    task = services.store.tasks.insert({
        "id": services.ids(),
        "projectId": project_id,
        "title": data["title"],
        "status": data.get("status") or "Pending",
        "assignedTo": data.get("assignedTo"),
        "dueDate": data.get("dueDate"),
        "estimatedHours": data.get("estimatedHours") or 0,
    })
    return jsonify(task)


# ==================== Time tracking ====================

@api.route("/time-entries", methods=["GET"])
def get_time_entries():
    return jsonify(_services().store.time_entries.list())


@api.route("/time-entries/start", methods=["POST"])
def start_time_entry():
    services = _services()
    data = _body()
    if not data.get("projectId"):
        raise InvalidParameter("projectId is required")
    project_id = str(data["projectId"])
    _project_or_404(services.store, project_id)
    entry = services.store.time_entries.insert({
        "id": services.ids(),
        "projectId": project_id,
        "taskId": data.get("taskId"),
        "description": data.get("description"),
        "startTime": services.clock.now().isoformat(),
        "endTime": None,
        "durationMinutes": 0,
        "status": RUNNING,
    })
    logger.info("timer started", extra={"entry_id": entry["id"], "project_id": project_id})
    return jsonify(entry)


@api.route("/time-entries/<entry_id>/stop", methods=["POST"])
def stop_time_entry(entry_id):
    services = _services()
    entries = services.store.time_entries
    entry = entries.get(entry_id)
    if entry is None:
        raise NotFound("Time entry", entry_id)
    patch = stop_patch(entry, services.clock.now())
    stopped = entries.update(entry_id, patch, expect={"status": RUNNING})
    if stopped is None:
        # another request completed it between our read and write
        raise InvalidState("time entry is not running")
    logger.info(
        "timer stopped",
        extra={"entry_id": entry_id, "duration_minutes": stopped["durationMinutes"]},
    )
    return jsonify(stopped)


@api.route("/time-entries/summary/<project_id>", methods=["GET"])
def time_summary(project_id):
    entries = _services().store.time_entries.list(projectId=project_id)
    total_minutes = tracked_minutes(entries)
    return jsonify({
        "totalMinutes": total_minutes,
        "totalHours": minutes_to_hours(total_minutes),
        "entries": entries,
    })


# ==================== Market trends & ideas ====================

@api.route("/market-trends", methods=["GET"])
def get_market_trends():
    return jsonify(list(TREND_CATALOG))


@api.route("/market-trends/search", methods=["GET"])
def search_market_trends():
    return jsonify(search_trends(TREND_CATALOG, request.args.get("q", "")))


@api.route("/business-ideas", methods=["GET"])
def get_business_ideas():
    return jsonify(list(IDEA_CATALOG))


@api.route("/business-ideas/generate", methods=["POST"])
def generate_business_ideas():
    return jsonify(filter_from_payload(IDEA_CATALOG, _body()))


# ==================== Profit estimation ====================

@api.route("/profit-estimation", methods=["POST"])
def profit_estimation():
    result = project(ProjectionInput.from_payload(_body()))
    return jsonify(result.to_dict())


@api.route("/profit-estimation/export", methods=["POST"])
def export_profit_estimation():
    result = project(ProjectionInput.from_payload(_body()))
    csv_bytes = result.to_frame().to_csv(index=False).encode("utf-8")
    return send_file(
        io.BytesIO(csv_bytes),
        mimetype="text/csv",
        as_attachment=True,
        download_name="profit_estimation.csv",
    )


# ==================== Dashboard ====================

@api.route("/dashboard/stats", methods=["GET"])
def dashboard_stats():
    store = _services().store
    summary = aggregate(
        store.projects.list(),
        store.time_entries.list(),
        TREND_CATALOG,
        IDEA_CATALOG,
        top_n=current_app.config["DASHBOARD_TOP_N"],
    )
    return jsonify(summary.to_dict())


def handle_venture_error(err):
    logger.warning(
        err.message,
        extra={"code": err.code, "path": request.path, "status": err.http_status},
    )
    return jsonify(err.to_dict()), err.http_status


def create_app(config=None, store=None, clock=None, ids=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.from_mapping(config)

    configure_logging(level=log_level(app.config["LOG_LEVEL"]))
    CORS(app)

    if store is None:
        backend = app.config["STORAGE_BACKEND"]
        if backend == "memory":
            store = Store.memory()
        elif backend == "sql":
            db.init_app(app)
            with app.app_context():
                db.create_all()
            store = Store.sql(db)
        else:
            raise ValueError(f"unknown STORAGE_BACKEND {backend!r}")

    app.extensions["venture_backend"] = Services(
        store=store,
        clock=clock or SystemClock(),
        ids=ids or UuidIds(),
    )
    app.register_blueprint(api)
    app.register_error_handler(VentureError, handle_venture_error)
    return app


def main():
    app = create_app()
    app.run(port=5000)


# --- Run app ---
if __name__ == "__main__":
    main()
