from datetime import datetime, time
from sqlalchemy import func
from msfeedback.extensions import db
from msfeedback.models.category import Category
from msfeedback.models.feedback import Feedback
from msfeedback.models.user import User
from msfeedback.utils.enums import FeedbackStatus
from msfeedback.utils.http import ok

RECENT_LIMIT = 5

def get_dashboard_stats_handler():
    by_status = dict(
        db.session.query(Feedback.status, func.count(Feedback.id))
        .group_by(Feedback.status)
        .all()
    )
    today_start = datetime.combine(datetime.utcnow().date(), time.min)

    category_stats = (
        db.session.query(Category.id, Category.name, Category.color, func.count(Feedback.id))
        .outerjoin(Feedback, Feedback.category_id == Category.id)
        .group_by(Category.id, Category.name, Category.color)
        .order_by(Category.sort_order.asc(), Category.id.asc())
        .all()
    )
    recent = Feedback.query.order_by(Feedback.created_at.desc(), Feedback.id.desc()).limit(RECENT_LIMIT).all()

    return ok({
        "totalFeedback": sum(by_status.values()),
        "pendingFeedback": by_status.get(FeedbackStatus.PENDING.value, 0),
        "processingFeedback": by_status.get(FeedbackStatus.PROCESSING.value, 0),
        "solvedFeedback": by_status.get(FeedbackStatus.SOLVED.value, 0),
        "rejectedFeedback": by_status.get(FeedbackStatus.REJECTED.value, 0),
        "todayNewFeedback": Feedback.query.filter(Feedback.created_at >= today_start).count(),
        "totalUsers": User.query.count(),
        "categoryStats": [
            {"id": cid, "name": name, "color": color, "count": count}
            for cid, name, color, count in category_stats
        ],
        "recentFeedback": [
            {
                "id": f.id,
                "feedbackNo": f.feedback_no,
                "title": f.title,
                "status": f.status,
                "priority": f.priority,
                "createdAt": f.created_at.isoformat(),
            }
            for f in recent
        ],
    })
