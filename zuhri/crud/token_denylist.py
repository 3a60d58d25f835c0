from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from zuhri.crud.base import CRUDBase
from zuhri.models.token_denylist import TokenDenylist

class CRUDTokenDenylist(CRUDBase[TokenDenylist, None, None]):
    def get_by_jti(self, db: Session, *, jti: str) -> Optional[TokenDenylist]:
        return db.query(self.model).filter(self.model.jti == jti).first()

    def purge_expired(self, db: Session, *, now: datetime) -> int:
        return db.query(self.model).filter(self.model.exp < now).delete(synchronize_session=False)

token_denylist = CRUDTokenDenylist(TokenDenylist)
