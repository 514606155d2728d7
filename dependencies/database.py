from database.db import SessionLocal


# ==========================================================
# [Common] request-scoped DB session
# ==========================================================
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
