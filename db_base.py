from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Declarative base for the users / assets / maintenance_records models.
    """
    pass
