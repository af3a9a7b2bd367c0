import requests

from Bookly.app.errors import UpstreamFailure
from Bookly.app.logger import get_logger

logger = get_logger("chat")


class BotpressTablesClient:
    """
    Minimal client for the Botpress Tables API, used to read the
    conversation rows the chatbot writes after every chat.
    """

    def __init__(self, api_url: str, token: str, bot_id: str):
        self.api_url = api_url.rstrip('/')
        self.token = token
        self.bot_id = bot_id

    @classmethod
    def from_config(cls, config):
        return cls(
            api_url=config['BOTPRESS_API_URL'],
            token=config.get('BOTPRESS_TOKEN'),
            bot_id=config.get('BOTPRESS_BOT_ID'),
        )

    def _headers(self):
        return {
            "Authorization": f"Bearer {self.token}",
            "x-bot-id": self.bot_id,
            "Content-Type": "application/json",
        }

    def find_table_rows(self, table, limit=50, offset=0, filter=None, order_by="row_id", order_direction="asc"):
        url = f"{self.api_url}/v1/tables/{table}/rows/find"
        body = {
            "limit": limit,
            "offset": offset,
            "filter": filter or {},
            "orderBy": order_by,
            "orderDirection": order_direction,
        }

        try:
            response = requests.post(url, json=body, headers=self._headers())
        except requests.exceptions.RequestException as e:
            raise UpstreamFailure(f"Error connecting to Botpress: {e}")

        if response.status_code != 200:
            try:
                error_msg = response.json().get('message', response.text)
            except ValueError:
                error_msg = response.text
            raise UpstreamFailure(f"Botpress rejected the row query ({response.status_code}): {error_msg}")

        rows = response.json().get("rows", [])
        logger.info(f"Fetched {len(rows)} rows from Botpress table '{table}'")
        return rows
