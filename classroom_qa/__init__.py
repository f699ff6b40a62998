# classroom_qa/__init__.py
from classroom_qa.db.session import engine
from classroom_qa.db.base import Base


def init_db():
    Base.metadata.create_all(bind=engine)
