from fastapi_users.db import SQLAlchemyBaseUserTableUUID
from canteen.models.base import Base


class User(SQLAlchemyBaseUserTableUUID, Base):
    """Administrator account. Customers book anonymously and have no row here."""

    __tablename__ = "users"
