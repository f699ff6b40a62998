# classroom_qa/db/base.py
from sqlalchemy.orm import declarative_base

Base = declarative_base()

from classroom_qa.models.user import User  # noqa
from classroom_qa.models.lecture import Lecture  # noqa
from classroom_qa.models.tag import Tag, question_tags  # noqa
from classroom_qa.models.question import Question  # noqa
from classroom_qa.models.answer import Answer  # noqa
from classroom_qa.models.image import Image  # noqa
