from fastapi import APIRouter

from schemas.auth import LoginRequest, LoginResponse

router = APIRouter()

# Demo account only, there is no user store
DEMO_USERNAME = "admin"
DEMO_PASSWORD = "123456"


@router.get("/hello")
async def hello():
    return {"message": "Backend OK"}


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(payload: LoginRequest):
    if payload.username == DEMO_USERNAME and payload.password == DEMO_PASSWORD:
        return LoginResponse(success=True, user={"username": payload.username, "role": "admin"})
    return LoginResponse(success=False, message="Invalid username or password")
