from datetime import datetime, timedelta
from typing import Dict, List, Optional

from Bookly.app.errors import NotFoundError, ValidationFailure

PAID = "Paid"
UNKNOWN_SERVICE = "Unknown Service"
DASHBOARD_PERIODS = ("day", "month", "year")


def period_bounds(period: str, day: Optional[str] = None, month: Optional[int] = None,
                  year: Optional[int] = None):
    """
    [start, end) datetimes covering the selected day, month of a year, or year.
    ``day`` is a YYYY-MM-DD string.
    """
    if period == "day":
        try:
            start = datetime.strptime(day or "", "%Y-%m-%d")
        except ValueError:
            raise ValidationFailure("day must be a YYYY-MM-DD date")
        return start, start + timedelta(days=1)

    if year is None or not 1 <= year <= 9998:
        raise ValidationFailure("year must be a valid year")

    if period == "month":
        if month is None or not 1 <= month <= 12:
            raise ValidationFailure("month must be between 1 and 12")
        start = datetime(year, month, 1)
        end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
        return start, end

    if period == "year":
        return datetime(year, 1, 1), datetime(year + 1, 1, 1)

    raise ValidationFailure(f"period must be one of {', '.join(DASHBOARD_PERIODS)}")


def service_ranking_pipeline(match: Dict, limit: int) -> List[Dict]:
    """
    Order count per service, highest first. Equal counts go to the service
    whose first order was inserted first (smallest order id).
    """
    return [
        {"$match": match},
        {"$group": {
            "_id": "$serviceId",
            "count": {"$sum": 1},
            "firstOrderId": {"$min": "$_id"},
        }},
        {"$sort": {"count": -1, "firstOrderId": 1}},
        {"$limit": limit},
    ]


class OrderAnalytics:
    """
    Revenue and service statistics computed from the Orders collection.
    Nothing is cached: every call runs its aggregation against the store.
    """

    def __init__(self, db):
        self.db = db
        self.orders_collection = db.Orders
        self.services_collection = db.Services

    def total_revenue(self):
        pipeline = [
            {"$match": {"status": PAID}},
            {"$group": {"_id": None, "totalAmount": {"$sum": "$amount"}}},
        ]
        results = list(self.orders_collection.aggregate(pipeline))
        return results[0]["totalAmount"] if results else 0

    def most_ordered_service(self) -> Dict:
        ranking = list(self.orders_collection.aggregate(service_ranking_pipeline({"status": PAID}, 1)))
        if not ranking:
            raise NotFoundError("No paid orders found")

        service = self.services_collection.find_one({"_id": ranking[0]["_id"]})
        if not service:
            raise NotFoundError("Service not found")

        return {"service": service, "orderCount": ranking[0]["count"]}

    def monthly_revenue_by_service(self, year: int) -> List[Dict]:
        """
        Paid revenue of ``year`` per service and month. Only months with at
        least one order are listed, and services without a paid order that
        year are left out.
        """
        pipeline = [
            {"$match": {
                "status": PAID,
                "transactionDateTime": {"$gte": datetime(year, 1, 1), "$lt": datetime(year + 1, 1, 1)},
            }},
            {"$project": {
                "serviceId": 1,
                "amount": 1,
                "month": {"$month": "$transactionDateTime"},
            }},
            {"$group": {
                "_id": {"serviceId": "$serviceId", "month": "$month"},
                "totalRevenue": {"$sum": "$amount"},
                "totalOrders": {"$sum": 1},
            }},
            {"$sort": {"_id.month": 1}},
            {"$group": {
                "_id": "$_id.serviceId",
                "monthly": {
                    "$push": {
                        "month": "$_id.month",
                        "totalRevenue": "$totalRevenue",
                        "totalOrders": "$totalOrders",
                    }
                },
            }},
            # Join the Services collection for the display name
            {"$lookup": {
                "from": "Services",
                "localField": "_id",
                "foreignField": "_id",
                "as": "serviceInfo",
            }},
            {"$unwind": "$serviceInfo"},
            {"$project": {
                "_id": 0,
                "serviceId": "$serviceInfo._id",
                "serviceName": "$serviceInfo.name",
                "monthly": 1,
            }},
            {"$sort": {"serviceName": 1}},
        ]
        return list(self.orders_collection.aggregate(pipeline))

    def dashboard_stats(self, period: str = "month", status: str = "all", day: Optional[str] = None,
                        month: Optional[int] = None, year: Optional[int] = None, top_limit: int = 5) -> Dict:
        """
        Totals, per-month figures and the top ordered services for one
        day, month or year, optionally restricted to one order status.
        """
        start, end = period_bounds(period, day=day, month=month, year=year)
        match = {"transactionDateTime": {"$gte": start, "$lt": end}}
        if status and status != "all":
            match["status"] = status

        monthly_pipeline = [
            {"$match": match},
            {"$project": {"amount": 1, "month": {"$month": "$transactionDateTime"}}},
            {"$group": {
                "_id": "$month",
                "totalRevenue": {"$sum": "$amount"},
                "totalOrders": {"$sum": 1},
            }},
            {"$sort": {"_id": 1}},
        ]
        monthly = [
            {"month": row["_id"], "totalRevenue": row["totalRevenue"], "totalOrders": row["totalOrders"]}
            for row in self.orders_collection.aggregate(monthly_pipeline)
        ]

        ranking = list(self.orders_collection.aggregate(service_ranking_pipeline(match, top_limit)))

        return {
            "totalRevenue": sum(row["totalRevenue"] for row in monthly),
            "totalOrders": sum(row["totalOrders"] for row in monthly),
            "monthly": monthly,
            "topServices": self._name_services(ranking),
        }

    def _name_services(self, ranking: List[Dict]) -> List[Dict]:
        service_ids = [row["_id"] for row in ranking]
        names = {
            service["_id"]: service.get("name")
            for service in self.services_collection.find({"_id": {"$in": service_ids}}, {"name": 1})
        }
        return [
            {
                "serviceId": row["_id"],
                "name": names.get(row["_id"]) or UNKNOWN_SERVICE,
                "count": row["count"],
            }
            for row in ranking
        ]
