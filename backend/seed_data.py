"""Seed database with demo data."""
from bizcore.config import get_settings
from bizcore.database import Base, build_engine, build_session_factory
from bizcore.models import (
    EnquiryForItems, PaperCalculationMaster, PaperMaster, Task, TelegramUser, UPSMaster, User
)
from datetime import datetime, timedelta, timezone


def seed():
    """Seed database with demo data."""
    engine = build_engine(get_settings())
    Base.metadata.create_all(engine)
    db = build_session_factory(engine)()

    try:
        # Attendance bot users (chat_id is filled in by /register)
        for name in ("RAHUL SHARMA", "PRIYA VERMA", "AMIT KUMAR"):
            db.add(TelegramUser(name=name))

        # Sales pipeline
        users_data = [
            {'role': 'EXEC', 'name': 'Sales Executive', 'email': 'exec@example.com'},
            {'role': 'COORDINATOR', 'name': 'Sales Coordinator', 'email': 'coordinator@example.com'},
            {'role': 'CRM', 'name': 'CRM Desk', 'email': 'crm@example.com'},
            {'role': 'TELECALLER', 'name': 'Telecaller', 'email': 'telecaller@example.com'},
        ]
        for user_data in users_data:
            db.add(User(**user_data))

        # Task bot
        now = datetime.now(timezone.utc)
        tasks_data = [
            {'task': 'Prepare weekly attendance sheet', 'doer': 'PRIYA VERMA', 'urgency': 'high',
             'due_date': now + timedelta(days=2), 'department': 'HR'},
            {'task': 'Call back pending leads', 'doer': 'AMIT KUMAR', 'urgency': 'normal',
             'due_date': now + timedelta(days=5), 'department': 'Sales'},
            {'task': 'Reconcile paper stock', 'doer': 'RAHUL SHARMA', 'urgency': 'low',
             'due_date': now + timedelta(days=7), 'department': 'Accounts', 'status': 'completed'},
        ]
        for task_data in tasks_data:
            db.add(Task(**task_data))

        # jobFms masters
        papers = [
            PaperMaster(paper_name='Art Paper', gsm=130, size_name='23x36', width=23, height=36,
                        category='Art', rate_per_kg=92.5),
            PaperMaster(paper_name='Maplitho', gsm=70, size_name='18x23', width=18, height=23,
                        category='Maplitho', rate_per_kg=78.0),
        ]
        db.add_all(papers)
        db.flush()

        db.add(PaperCalculationMaster(paper_id=papers[0].id, cutting_pattern='2 x 2', notes='Standard cut'))
        db.add(PaperCalculationMaster(paper_id=papers[1].id, wastage_sheets=30))
        db.add(UPSMaster(item_size_id=1, ups=4, paper_size_id=papers[0].id))
        db.add(UPSMaster(item_size_id=2, ups=8, paper_size_id=papers[1].id))

        for item in ('Visiting Cards', 'Letter Heads', 'Brochures', 'Stickers'):
            db.add(EnquiryForItems(item=item))

        db.commit()
        print("✅ Database seeded successfully!")

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
