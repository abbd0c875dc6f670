import sys
from sqlalchemy.orm import Session
from database.db import SessionLocal
from models.subjects import Subject as SubjectModel

RETIRED_SUBJECTS = ["AQDA", "WAP"]   # ✅ 더 이상 쓰지 않는 과목

def cleanup(names):
    db: Session = SessionLocal()
    try:
        deleted = (
            db.query(SubjectModel)
            .filter(SubjectModel.name.in_(names))
            .delete(synchronize_session=False)
        )
        db.commit()
        print(f"✅ 과목 {deleted}건 삭제 ({', '.join(names)})")
    finally:
        db.close()

if __name__ == "__main__":
    cleanup(sys.argv[1:] or RETIRED_SUBJECTS)
