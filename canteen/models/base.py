from sqlalchemy.orm import declarative_base

Base = declarative_base()


def enum_values(enum_cls):
    # Store str-enums by their display value ("Breakfast"), not their member name
    return [member.value for member in enum_cls]
