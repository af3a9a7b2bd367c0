from datetime import datetime, timezone

from flask import Blueprint, request, jsonify, session, current_app

from Bookly.app.errors import ValidationFailure, NotFoundError, failure_response
from Bookly.app.logger import get_logger
from Bookly.app.utils import (
    PRIVILEGED_ROLES,
    generate_order_code,
    login_required,
    normalize_order_code,
    roles_required,
    to_object_id,
)
from Bookly.booking_analytics.order_analytics import OrderAnalytics
from Bookly.mongodb_database.connection import get_db, orders_collection, services_collection

orders_bp = Blueprint('orders', __name__, url_prefix='/api/orders')

logger = get_logger("orders")

BUYER_FIELDS = ('description', 'buyerName', 'buyerEmail', 'buyerPhone', 'buyerAddress',
                'currency', 'paymentMethod', 'paymentStatus')


def _analytics():
    return OrderAnalytics(get_db())


def _current_member_id():
    return to_object_id(session.get('user_id'))


def _parse_transaction_datetime(value):
    if not value:
        return datetime.utcnow()
    if not isinstance(value, str):
        raise ValidationFailure("transactionDateTime must be an ISO-8601 string")
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        raise ValidationFailure("transactionDateTime must be an ISO-8601 string")
    # stored as naive UTC like the rest of the collection
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _order_status(payment_status):
    return "Paid" if isinstance(payment_status, str) and payment_status.upper() == "PAID" else "Pending"


@orders_bp.route('', methods=['POST'])
@login_required
def create_order():
    """Checkout: persist an order for the logged-in member."""
    try:
        data = request.get_json(silent=True) or {}

        service_id = to_object_id(data.get('serviceId'))
        service = services_collection().find_one({"_id": service_id}) if service_id else None
        if not service:
            return jsonify({'message': 'Service not found'}), 404

        amount = data.get('amount')
        if isinstance(amount, bool) or not isinstance(amount, (int, float)) or amount < 0:
            raise ValidationFailure("amount must be a non-negative number")

        order = {
            "memberId": _current_member_id(),
            "serviceId": service_id,
            "orderCode": generate_order_code(),
            "amount": amount,
            "items": data.get('items') or [],
            "status": _order_status(data.get('paymentStatus')),
            "transactionDateTime": _parse_transaction_datetime(data.get('transactionDateTime')),
        }
        for field in BUYER_FIELDS:
            order[field] = data.get(field)

        orders_collection().insert_one(order)
        logger.info(f"Order {order['orderCode']} created for service {service_id}")

        return jsonify({'message': 'Order created successfully', 'order': order}), 201

    except ValidationFailure as e:
        return e.to_response()
    except Exception as e:
        logger.exception(f"Order creation failed: {e}")
        return failure_response(e)


@orders_bp.route('/member', methods=['GET'])
@login_required
def get_orders_by_member():
    """Paid orders of the logged-in member ([] when there are none)."""
    try:
        orders = list(orders_collection().find({"memberId": _current_member_id(), "status": "Paid"}))
        return jsonify(orders), 200
    except Exception as e:
        logger.exception(f"Fetching member orders failed: {e}")
        return failure_response(e)


@orders_bp.route('/revenue', methods=['GET'])
def get_total_revenue():
    try:
        return jsonify({'totalRevenue': _analytics().total_revenue()}), 200
    except Exception as e:
        logger.exception(f"Total revenue aggregation failed: {e}")
        return failure_response(e)


@orders_bp.route('/most-ordered-service', methods=['GET'])
def get_most_ordered_service():
    try:
        return jsonify(_analytics().most_ordered_service()), 200
    except NotFoundError as e:
        return e.to_response()
    except Exception as e:
        logger.exception(f"Most ordered service aggregation failed: {e}")
        return failure_response(e)


@orders_bp.route('/monthly-revenue-by-service', methods=['GET'])
@login_required
@roles_required(PRIVILEGED_ROLES)
def get_monthly_revenue_by_service():
    year = request.args.get('year', type=int)
    if year is None or not 1 <= year <= 9998:
        return ValidationFailure("year query parameter must be a valid year").to_response()

    try:
        return jsonify(_analytics().monthly_revenue_by_service(year)), 200
    except Exception as e:
        logger.exception(f"Monthly revenue aggregation failed: {e}")
        return failure_response(e)


@orders_bp.route('/dashboard-stats', methods=['GET'])
@login_required
@roles_required(PRIVILEGED_ROLES)
def get_dashboard_stats():
    """
    Figures for the manager dashboard: revenue, order count, per-month
    breakdown and top services for the selected day, month or year.
    """
    today = datetime.utcnow()
    try:
        stats = _analytics().dashboard_stats(
            period=request.args.get('period', 'month'),
            status=request.args.get('status', 'all'),
            day=request.args.get('day', today.strftime('%Y-%m-%d')),
            month=request.args.get('month', today.month, type=int),
            year=request.args.get('year', today.year, type=int),
            top_limit=current_app.config['TOP_SERVICES_LIMIT'],
        )
        return jsonify(stats), 200
    except ValidationFailure as e:
        return e.to_response()
    except Exception as e:
        logger.exception(f"Dashboard statistics failed: {e}")
        return failure_response(e)


@orders_bp.route('', methods=['GET'])
@login_required
@roles_required(PRIVILEGED_ROLES)
def get_all_orders():
    try:
        return jsonify(list(orders_collection().find())), 200
    except Exception as e:
        logger.exception(f"Fetching all orders failed: {e}")
        return failure_response(e)


# Registered after the literal paths above so it never shadows them
@orders_bp.route('/<order_code>', methods=['GET'])
@login_required
def get_order_by_code(order_code):
    try:
        query = {"orderCode": normalize_order_code(order_code)}
        # Members only see their own orders; others get the same 404 as a missing code
        if session.get('role') not in PRIVILEGED_ROLES:
            query["memberId"] = _current_member_id()
        order = orders_collection().find_one(query)
        if not order:
            return jsonify({'message': 'Order not found'}), 404
        return jsonify(order), 200
    except Exception as e:
        logger.exception(f"Fetching order {order_code} failed: {e}")
        return failure_response(e)


@orders_bp.route('/<order_id>', methods=['DELETE'])
@login_required
def delete_order(order_id):
    """Only the owner may delete; anyone else sees the same answer as for a missing order."""
    try:
        object_id = to_object_id(order_id)
        deleted_order = None
        if object_id:
            deleted_order = orders_collection().find_one_and_delete(
                {"_id": object_id, "memberId": _current_member_id()}
            )

        if not deleted_order:
            return jsonify({'message': 'Order not found or unauthorized'}), 404

        logger.info(f"Order {order_id} deleted")
        return jsonify({'message': 'Order deleted successfully'}), 200
    except Exception as e:
        logger.exception(f"Deleting order {order_id} failed: {e}")
        return failure_response(e)
