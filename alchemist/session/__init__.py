from alchemist.session.session import Session, build_session

__all__ = ["Session", "build_session"]
