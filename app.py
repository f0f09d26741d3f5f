# app.py
import logging
from dataclasses import dataclass

from flask import Blueprint, Flask, Response, current_app, jsonify, request

from analytics import AnalyticsAggregator
from billing import build_bill
from bookings import BookingEngine, is_active, summarize
from catalog import EmployeeService, RoomService
from config import DefaultConfig
from errors import NotFoundError, RoomInUseError, ValidationError
from guests import GuestResolver
from models import parse_datetime
from sample_data import seed_sample_data
from storage import EntityStore, JsonFileBackend, MemoryBackend

api = Blueprint("api", __name__)


@dataclass
class FrontDesk:
    store: EntityStore
    guests: GuestResolver
    rooms: RoomService
    employees: EmployeeService
    bookings: BookingEngine
    analytics: AnalyticsAggregator


def build_front_desk(config, store=None) -> FrontDesk:
    if store is None:
        data_dir = config.get("DATA_DIR")
        store = EntityStore(JsonFileBackend(data_dir) if data_dir else MemoryBackend())
    guests = GuestResolver(store)
    return FrontDesk(
        store=store,
        guests=guests,
        rooms=RoomService(store),
        employees=EmployeeService(store, min_contact_digits=config["MIN_MOBILE_DIGITS"]),
        bookings=BookingEngine(store, guests, min_mobile_digits=config["MIN_MOBILE_DIGITS"]),
        analytics=AnalyticsAggregator(store),
    )


def desk() -> FrontDesk:
    return current_app.extensions["front_desk"]


def _as_of():
    value = request.args.get("as_of")
    if not value:
        return desk().store.clock()
    try:
        return parse_datetime(value)
    except ValueError:
        raise ValidationError("as_of", "as_of must be an ISO date or datetime")


def found(value, collection, entity_id):
    """Turn a service's None/False sentinel into a 404."""
    if value is None or value is False:
        raise NotFoundError(collection, entity_id)
    return value


def _booking_json(booking, as_of):
    data = booking.to_dict()
    data["nights"] = booking.nights
    data["is_active"] = is_active(booking, as_of)
    return data


# --- Rooms ---

@api.route("/api/rooms", methods=["GET", "POST"])
def api_rooms():
    if request.method == "GET":
        return jsonify([r.to_dict() for r in desk().rooms.list_rooms()])
    room = desk().rooms.create_room(request.json or {})
    return jsonify(room.to_dict()), 201


@api.route("/api/rooms/<room_id>", methods=["GET", "PATCH", "DELETE"])
def api_room(room_id):
    rooms = desk().rooms
    if request.method == "GET":
        room = rooms.get_room(room_id)
    elif request.method == "PATCH":
        room = rooms.update_room(room_id, request.json or {})
    else:
        found(rooms.delete_room(room_id), "rooms", room_id)
        return jsonify({"ok": True}), 200
    found(room, "rooms", room_id)
    return jsonify(room.to_dict()), 200


# --- Employees ---

@api.route("/api/employees", methods=["GET", "POST"])
def api_employees():
    if request.method == "GET":
        return jsonify([e.to_dict() for e in desk().employees.list_employees()])
    employee = desk().employees.create_employee(request.json or {})
    return jsonify(employee.to_dict()), 201


@api.route("/api/employees/<employee_id>", methods=["GET", "PATCH", "DELETE"])
def api_employee(employee_id):
    employees = desk().employees
    if request.method == "GET":
        employee = employees.get_employee(employee_id)
    elif request.method == "PATCH":
        employee = employees.update_employee(employee_id, request.json or {})
    else:
        found(employees.delete_employee(employee_id), "employees", employee_id)
        return jsonify({"ok": True}), 200
    found(employee, "employees", employee_id)
    return jsonify(employee.to_dict()), 200


@api.route("/api/employees/<employee_id>/toggle-active", methods=["POST"])
def api_employee_toggle(employee_id):
    employee = desk().employees.toggle_active(employee_id)
    found(employee, "employees", employee_id)
    return jsonify(employee.to_dict()), 200


# --- Guests ---

@api.route("/api/guests")
def api_guests():
    return jsonify([g.to_dict() for g in desk().guests.list_guests()])


# --- Bookings ---

@api.route("/api/bookings", methods=["GET", "POST"])
def api_bookings():
    as_of = _as_of()
    if request.method == "GET":
        return jsonify([_booking_json(b, as_of) for b in desk().bookings.list_bookings()])
    data = request.json or {}
    booking = desk().bookings.create_booking(
        guest_name=data.get("guest_name", ""),
        mobile_number=data.get("mobile_number", ""),
        room_ids=data.get("room_ids") or [],
        check_in=data.get("check_in_date"),
        check_out=data.get("check_out_date"),
        notes=data.get("notes"),
    )
    return jsonify(_booking_json(booking, as_of)), 201


@api.route("/api/bookings/<booking_id>", methods=["GET", "PATCH", "DELETE"])
def api_booking(booking_id):
    bookings = desk().bookings
    if request.method == "GET":
        booking = bookings.get_booking(booking_id)
    elif request.method == "PATCH":
        booking = bookings.update_booking(booking_id, request.json or {})
    else:
        found(bookings.delete_booking(booking_id), "bookings", booking_id)
        return jsonify({"ok": True}), 200
    found(booking, "bookings", booking_id)
    return jsonify(_booking_json(booking, _as_of())), 200


@api.route("/api/bookings/<booking_id>/toggle-payment", methods=["POST"])
def api_booking_toggle_payment(booking_id):
    booking = desk().bookings.toggle_payment(booking_id)
    found(booking, "bookings", booking_id)
    return jsonify(_booking_json(booking, _as_of())), 200


@api.route("/api/bookings/<booking_id>/bill")
def api_booking_bill(booking_id):
    booking = desk().bookings.get_booking(booking_id)
    found(booking, "bookings", booking_id)
    bill = build_bill(
        booking,
        hotel_name=current_app.config["HOTEL_NAME"],
        issued_on=desk().store.clock().date(),
        currency_symbol=current_app.config["CURRENCY_SYMBOL"],
    )
    return Response(
        bill.render(),
        mimetype="text/plain",
        headers={"Content-Disposition": f"attachment; filename={bill.filename}"},
    )


# --- History and dashboard ---

@api.route("/api/history")
def api_history():
    as_of = _as_of()
    results = desk().bookings.search_bookings(
        term=request.args.get("q"),
        payment=request.args.get("payment"),
        date_from=request.args.get("date_from"),
        date_to=request.args.get("date_to"),
    )
    return jsonify({
        "bookings": [_booking_json(b, as_of) for b in results],
        "summary": summarize(results),
    })


@api.route("/api/dashboard")
def api_dashboard():
    as_of = _as_of()
    analytics = desk().analytics
    stats = analytics.compute_stats(as_of)
    series = analytics.compute_revenue_series(
        as_of, months=current_app.config["REVENUE_SERIES_MONTHS"])
    return jsonify({
        "stats": stats.to_dict(),
        "revenue": [p.to_dict() for p in series],
    })


@api.route("/")
def index():
    return jsonify({"name": current_app.config["HOTEL_NAME"], "status": "ok"})


def create_app(config=None, store=None):
    app = Flask(__name__)
    app.config.from_object(DefaultConfig)
    app.config.from_prefixed_env("FRONTDESK")
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    front_desk = build_front_desk(app.config, store=store)
    app.extensions["front_desk"] = front_desk
    if app.config["SEED_SAMPLE_DATA"]:
        seed_sample_data(front_desk.store, front_desk.rooms, front_desk.employees)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err):
        return jsonify(err.to_dict()), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(err):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(RoomInUseError)
    def handle_room_in_use(err):
        return jsonify(err.to_dict()), 409

    app.register_blueprint(api)
    return app


if __name__ == "__main__":
    create_app().run(debug=True)
