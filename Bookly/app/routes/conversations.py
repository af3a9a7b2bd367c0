from flask import Blueprint, request, jsonify, current_app

from Bookly.app.errors import UpstreamFailure, failure_response
from Bookly.app.logger import get_logger
from Bookly.app.utils import PRIVILEGED_ROLES, login_required, roles_required
from Bookly.booking_analytics.booking_classifier import confirmed_bookings
from Bookly.booking_analytics.row_filter import filter_rows, paginate
from Bookly.booking_analytics.transcript_inference import resolve_row

conversations_bp = Blueprint('conversations', __name__, url_prefix='/api/conversations')

logger = get_logger("conversations")

CONVERSATION_VIEWER_ROLES = PRIVILEGED_ROLES + ("Staff",)


def _fetch_conversations():
    client = current_app.extensions['chat_client']
    return client.find_table_rows(
        table=current_app.config['CONVERSATIONS_TABLE'],
        limit=current_app.config['CONVERSATION_FETCH_LIMIT'],
        offset=0,
        filter={},
        order_by='row_id',
        order_direction='asc',
    )


def _conversation_page(rows):
    """Filter the fetched rows with the query-string criteria and cut out the requested page."""
    filtered = filter_rows(
        rows,
        date=request.args.get('date', '').strip(),
        sentiment=request.args.get('sentiment', '').strip(),
        keyword=request.args.get('keyword', '').strip(),
    )
    page = paginate(
        filtered,
        page=request.args.get('page', 1, type=int),
        page_size=current_app.config['ROWS_PER_PAGE'],
    )
    page['rows'] = [resolve_row(row) for row in page['rows']]
    return page


@conversations_bp.route('', methods=['GET'])
@login_required
@roles_required(CONVERSATION_VIEWER_ROLES)
def list_conversations():
    """All chatbot conversations with summary, sentiment and topics filled in."""
    try:
        return jsonify(_conversation_page(_fetch_conversations())), 200
    except UpstreamFailure as e:
        logger.error(f"Error fetching Botpress data: {e}")
        return e.to_response()
    except Exception as e:
        logger.exception(f"Listing conversations failed: {e}")
        return failure_response(e)


@conversations_bp.route('/confirmed-bookings', methods=['GET'])
@login_required
@roles_required(PRIVILEGED_ROLES)
def list_confirmed_bookings():
    """Conversations whose last message confirms a booking."""
    try:
        rows = confirmed_bookings(_fetch_conversations())
        return jsonify(_conversation_page(rows)), 200
    except UpstreamFailure as e:
        logger.error(f"Error fetching Botpress data: {e}")
        return e.to_response()
    except Exception as e:
        logger.exception(f"Listing confirmed bookings failed: {e}")
        return failure_response(e)
