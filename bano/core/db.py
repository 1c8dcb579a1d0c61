from contextlib import contextmanager

from sqlalchemy.orm import Session


@contextmanager
def transaction(db: Session):
    """
    仓库层统一使用的事务管理器：
    - 正常退出时 commit
    - 出现异常时 rollback 并继续抛出
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
