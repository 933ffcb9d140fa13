"""Flask web application for the service log and maintenance reminders."""

import logging
from datetime import date

from flask import Flask, g, jsonify, request
from sqlalchemy.orm import Session

from servicelog import (
    Car,
    MaintenanceReminder,
    NotFoundError,
    ReminderStatus,
    SaveFailedError,
    ServiceRecord,
    ValidationFailedError,
    count_by_urgency,
    init_db,
    list_open_reminders,
    make_engine,
    make_session_factory,
    record_service,
    sort_by_urgency,
    summarize,
    validate_car_input,
    validate_service_input,
)
from servicelog import config, store

logger = logging.getLogger(__name__)

# Header carrying the authenticated principal, set by the auth proxy
USER_HEADER = "X-User-Id"


# =============================================================================
# Serializers
# =============================================================================


def _iso(value):
    return value.isoformat() if value is not None else None


def car_to_dict(car: Car) -> dict:
    return {
        "id": car.id,
        "name": car.name,
        "make": car.make,
        "model": car.model,
        "year": car.year,
        "licensePlate": car.license_plate,
        "currentMileage": car.current_mileage,
        "isPrimary": car.is_primary,
    }


def record_to_dict(record: ServiceRecord) -> dict:
    return {
        "id": record.id,
        "carId": record.car_id,
        "serviceDate": _iso(record.service_date),
        "mileageAtService": record.mileage_at_service,
        "serviceType": record.service_type.name,
        "label": record.label,
        "customServiceType": record.custom_service_type,
        "description": record.description,
        "partsReplaced": record.parts_replaced,
        "serviceLocation": record.service_location,
        "isSelfService": record.is_self_service,
        "serviceCost": record.service_cost,
        "invoicePhotoUrl": record.invoice_url,
        "notes": record.notes,
        "entryCreatedAt": _iso(record.entry_created_at),
        "isBackdated": record.is_backdated,
    }


def reminder_to_dict(reminder: MaintenanceReminder) -> dict:
    return {
        "id": reminder.id,
        "carId": reminder.car_id,
        "reminderType": reminder.reminder_type.name,
        "label": reminder.label,
        "lastServiceDate": _iso(reminder.last_service_date),
        "lastServiceMileage": reminder.last_service_mileage,
        "dueDate": _iso(reminder.due_date),
        "dueMileage": reminder.due_mileage,
        "isCompleted": reminder.is_completed,
    }


def status_to_dict(status: ReminderStatus) -> dict:
    d = reminder_to_dict(status.reminder)
    d.update(
        {
            "car": status.reminder.car.name,
            "urgency": status.urgency.name,
            "urgencyLabel": status.urgency.label,
            "kmRemaining": status.km_remaining,
            "daysRemaining": status.days_remaining,
        }
    )
    return d


# =============================================================================
# Application
# =============================================================================


def create_app(database_url: str = None) -> Flask:
    """Build the app bound to one database."""
    app = Flask(__name__)
    app.secret_key = config.SECRET_KEY

    engine = make_engine(database_url or config.DATABASE_URL)
    init_db(engine)
    session_factory = make_session_factory(engine)
    app.extensions["servicelog_engine"] = engine

    def get_session() -> Session:
        """One session per request, closed on teardown."""
        if "db" not in g:
            g.db = session_factory()
        return g.db

    def current_owner() -> str:
        owner = request.headers.get(USER_HEADER)
        if not owner:
            # Unauthenticated callers learn nothing about existing rows
            raise NotFoundError("Not found")
        return owner

    def form() -> dict:
        return request.get_json(silent=True) or {}

    @app.teardown_appcontext
    def close_session(exc):
        db = g.pop("db", None)
        if db is not None:
            db.close()

    @app.errorhandler(ValidationFailedError)
    def handle_validation(e):
        logger.info("Rejected input on %s: %s", request.path, e.reason)
        return jsonify({"error": e.reason, "field": e.field}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(SaveFailedError)
    def handle_save_failed(e):
        return jsonify({"error": str(e)}), 500

    # -------------------------------------------------------------------------
    # Cars
    # -------------------------------------------------------------------------

    @app.route("/cars", methods=["GET"])
    def cars_index():
        cars = store.list_cars(get_session(), current_owner())
        return jsonify([car_to_dict(c) for c in cars])

    @app.route("/cars", methods=["POST"])
    def cars_create():
        data = validate_car_input(form())
        car = store.create_car(get_session(), current_owner(), data)
        return jsonify(car_to_dict(car)), 201

    @app.route("/cars/<int:car_id>", methods=["GET"])
    def car_detail(car_id: int):
        session = get_session()
        owner = current_owner()
        car = store.get_owned_car(session, car_id, owner)
        d = car_to_dict(car)
        d["openReminders"] = [
            status_to_dict(s)
            for s in sort_by_urgency(list_open_reminders(session, owner, car_id=car.id))
        ]
        return jsonify(d)

    @app.route("/cars/<int:car_id>", methods=["PUT"])
    def car_update(car_id: int):
        session = get_session()
        car = store.get_owned_car(session, car_id, current_owner())
        data = validate_car_input(form())
        store.update_car(session, car, data)
        return jsonify(car_to_dict(car))

    @app.route("/cars/<int:car_id>", methods=["DELETE"])
    def car_delete(car_id: int):
        session = get_session()
        car = store.get_owned_car(session, car_id, current_owner())
        store.delete_car(session, car)
        return "", 204

    # -------------------------------------------------------------------------
    # Service records
    # -------------------------------------------------------------------------

    @app.route("/cars/<int:car_id>/services", methods=["GET"])
    def services_index(car_id: int):
        session = get_session()
        car = store.get_owned_car(session, car_id, current_owner())
        records = store.list_service_records(session, car)
        return jsonify([record_to_dict(r) for r in records])

    @app.route("/cars/<int:car_id>/services", methods=["POST"])
    def services_create(car_id: int):
        session = get_session()
        car = store.get_owned_car(session, car_id, current_owner())
        data = validate_service_input(form())
        record = record_service(session, car, data)
        return jsonify(record_to_dict(record)), 201

    @app.route("/services/<int:record_id>", methods=["GET"])
    def service_detail(record_id: int):
        record = store.get_owned_service_record(
            get_session(), record_id, current_owner()
        )
        return jsonify(record_to_dict(record))

    @app.route("/services/<int:record_id>", methods=["PUT"])
    def service_update(record_id: int):
        session = get_session()
        record = store.get_owned_service_record(session, record_id, current_owner())
        data = validate_service_input(form())
        store.update_service_record(session, record, data)
        return jsonify(record_to_dict(record))

    @app.route("/services/<int:record_id>", methods=["DELETE"])
    def service_delete(record_id: int):
        session = get_session()
        record = store.get_owned_service_record(session, record_id, current_owner())
        store.delete_service_record(session, record)
        return "", 204

    # -------------------------------------------------------------------------
    # Reminders
    # -------------------------------------------------------------------------

    @app.route("/reminders", methods=["GET"])
    def reminders_index():
        statuses = sort_by_urgency(list_open_reminders(get_session(), current_owner()))
        return jsonify(
            {
                "counts": count_by_urgency(statuses),
                "reminders": [status_to_dict(s) for s in statuses],
            }
        )

    @app.route("/reminders/<int:reminder_id>/complete", methods=["POST"])
    def reminder_complete(reminder_id: int):
        session = get_session()
        reminder = store.get_owned_reminder(session, reminder_id, current_owner())
        store.mark_reminder_complete(session, reminder)
        return jsonify(reminder_to_dict(reminder))

    @app.route("/reminders/<int:reminder_id>", methods=["DELETE"])
    def reminder_dismiss(reminder_id: int):
        session = get_session()
        reminder = store.get_owned_reminder(session, reminder_id, current_owner())
        store.dismiss_reminder(session, reminder)
        return "", 204

    # -------------------------------------------------------------------------
    # Dashboard
    # -------------------------------------------------------------------------

    @app.route("/dashboard", methods=["GET"])
    def dashboard():
        summary = summarize(get_session(), current_owner())
        return jsonify(
            {
                "year": date.today().year,
                "totalCars": summary.total_cars,
                "totalServices": summary.total_services,
                "activeReminders": summary.active_reminders,
                "totalSpent": summary.total_spent,
                "monthlyCosts": summary.monthly_costs,
                "recentActivity": [
                    dict(record_to_dict(r), car=r.car.name)
                    for r in summary.recent_activity
                ],
            }
        )

    return app


if __name__ == "__main__":
    config.configure_logging()
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    create_app().run(debug=True, host="0.0.0.0", port=5001)
