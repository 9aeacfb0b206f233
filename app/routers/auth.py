from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.schemas.user import IdentityOut, UserCreate, UserLogin, UserOut
from app.models.user import User
from app.utils.auth import hash_password, verify_password, create_user_token
from app.database import get_db
from app.dependencies import get_current_identity
from app.services.identity import Identity

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut)
def register(user: UserCreate, db: Session = Depends(get_db)):
    exists = db.query(User).filter(User.email == user.email).first()
    if exists:
        raise HTTPException(status_code=400, detail="Email already exists")

    try:
        hashed = hash_password(user.password)
    except ValueError as e:
        # map hashing/validation errors to a 400 so client gets a clear message
        raise HTTPException(status_code=400, detail=str(e))

    # display name falls back to the local part of the email
    name = user.name or user.email.split("@", 1)[0]
    new_user = User(email=user.email, password=hashed, name=name)
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    return new_user


@router.post("/login")
def login(user: UserLogin, db: Session = Depends(get_db)):
    db_user = db.query(User).filter(User.email == user.email).first()
    if not db_user or not verify_password(user.password, db_user.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return {"token": create_user_token(db_user)}


@router.get("/me", response_model=IdentityOut)
def me(identity: Identity = Depends(get_current_identity)):
    return identity
