from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ...config.settings import get_settings

settings = get_settings()
database_url = settings.get_database_url()

connect_args = {}
if database_url.startswith("sqlite"):
    # Handlers run on the thread pool, so SQLite connections cross threads
    connect_args["check_same_thread"] = False

engine = create_engine(
    database_url,
    echo=settings.database_echo,
    connect_args=connect_args,
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
