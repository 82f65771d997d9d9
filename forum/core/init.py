"""
Application initialization module
Handles initial setup tasks like creating the default admin member
"""

import logging

from sqlalchemy.orm import Session

from forum.core.config import settings
from forum.models.member import Member

logger = logging.getLogger(__name__)


def init_default_admin(db: Session) -> None:
    """
    Create an admin member if no admin exists yet.

    Moderation endpoints (hide, restore, report review) need at least one
    admin; the name and email come from settings.

    Args:
        db: Database session
    """
    try:
        existing_admin = db.query(Member).filter(Member.role == "admin").first()

        if existing_admin:
            logger.info(
                f"✅ Admin member already exists (ID: {existing_admin.id}, Name: {existing_admin.name})"
            )
            return

        admin = Member(
            name=settings.admin_default_name,
            email=settings.admin_default_email,
            role="admin",
            is_active=True,
        )

        db.add(admin)
        db.commit()
        db.refresh(admin)

        logger.info("=" * 60)
        logger.info("🎉 DEFAULT ADMIN MEMBER CREATED")
        logger.info(f"ID: {admin.id}")
        logger.info(f"Email: {settings.admin_default_email}")
        logger.info("=" * 60)

    except Exception as e:
        logger.error(f"❌ Failed to initialize admin member: {e}")
        db.rollback()
        raise


def initialize_application(db: Session) -> None:
    """
    Run all application initialization tasks.

    Args:
        db: Database session
    """
    logger.info("🚀 Starting application initialization...")

    init_default_admin(db)

    logger.info("✅ Application initialization completed")
