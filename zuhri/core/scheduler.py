import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from zuhri.core.config import settings
from zuhri.core.database import SessionLocal
from zuhri.crud.token_denylist import token_denylist as crud_token_denylist
from zuhri.services.exam_attempt import exam_attempt_service
from zuhri.utils.dates import utcnow

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


async def expire_abandoned_attempts():
    db = SessionLocal()
    try:
        expired_count = await exam_attempt_service.expire_overdue_attempts(db)
        if expired_count:
            logger.info(f"Attempt sweep finished: {expired_count} attempts auto-submitted")
    except Exception as e:
        logger.error(f"Error expiring abandoned exam attempts: {e}")
        db.rollback()
    finally:
        db.close()


async def purge_expired_tokens():
    db = SessionLocal()
    try:
        purged = crud_token_denylist.purge_expired(db, now=utcnow())
        db.commit()
        logger.info(f"Purged {purged} expired denylisted tokens")
    except Exception as e:
        logger.error(f"Error purging token denylist: {e}")
        db.rollback()
    finally:
        db.close()


def start_scheduler():
    if settings.TESTING:
        logger.info("Scheduler disabled in test environment")
        return

    if not scheduler.running:
        scheduler.add_job(
            expire_abandoned_attempts,
            'interval',
            minutes=settings.ATTEMPT_SWEEP_INTERVAL_MINUTES,
            id='expire_abandoned_attempts',
            name='Auto-submit expired exam attempts',
            replace_existing=True
        )
        scheduler.add_job(
            purge_expired_tokens,
            'cron',
            hour=3,
            minute=0,
            id='purge_expired_tokens',
            name='Purge expired token denylist entries',
            replace_existing=True
        )
        scheduler.start()
        logger.info("Scheduler started with attempt expiry and token purge jobs")


def stop_scheduler():
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler stopped")
