import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from app.tasks.celery_app import celery_app
from app.database import SessionLocal
from app.exceptions import InvalidArgumentError, NotFoundError
from app.services.product_service import ProductService

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name="report_expiring_products")
def report_expiring_products(self) -> dict:
    """
    Daily inventory triage: list products expiring this calendar month.

    Returns:
        Dictionary with the number of products and their ids, soonest first
    """
    db = SessionLocal()

    try:
        products = ProductService(db).find_expiring_this_month()
        products.sort(key=lambda p: (p.expiration_date, p.id))

        for product in products:
            logger.info(
                f"Product #{product.id} '{product.name}' expires on {product.expiration_date.isoformat()}"
            )
        logger.info(f"{len(products)} product(s) expire this month")

        return {
            "status": "success",
            "count": len(products),
            "product_ids": [p.id for p in products],
        }

    except SQLAlchemyError as e:
        logger.error(f"Error building expiring products report: {e}")
        raise self.retry(exc=e, countdown=60, max_retries=3)

    finally:
        db.close()


@celery_app.task(bind=True, name="apply_expiration_discount")
def apply_expiration_discount(
    self,
    percentage: int,
    min_days: Optional[int] = None,
    max_days: Optional[int] = None,
) -> dict:
    """
    Apply the expiration-window discount outside the request cycle.

    Domain errors are reported in the result and never retried;
    database errors are retried.

    Args:
        percentage: Discount percentage (0-100)
        min_days: Window start in days from today (default from settings)
        max_days: Window end in days from today (default from settings)

    Returns:
        Dictionary with the status and the discounted product ids
    """
    logger.info(f"Applying {percentage}% expiration discount (min_days={min_days}, max_days={max_days})")
    db = SessionLocal()

    try:
        products = ProductService(db).apply_discount_by_expiration(
            percentage, min_days=min_days, max_days=max_days
        )
        return {
            "status": "success",
            "percentage": percentage,
            "product_ids": [p.id for p in products],
        }

    except InvalidArgumentError as e:
        logger.warning(f"Expiration discount rejected: {e}")
        return {"status": "invalid", "error": str(e)}

    except NotFoundError as e:
        logger.info(f"Expiration discount skipped: {e}")
        return {"status": "not_found", "error": str(e)}

    except SQLAlchemyError as e:
        logger.error(f"Error applying expiration discount: {e}")
        raise self.retry(exc=e, countdown=60, max_retries=3)

    finally:
        db.close()
