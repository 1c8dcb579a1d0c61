from fastapi import APIRouter, Depends

from bano.schemas.user import RegisterIn, LoginIn, ForgotPasswordIn
from bano.core.biz_response import BizResponse
from bano.service import user_svc
from bano.routers.deps import get_current_uid, set_session_cookie, clear_session_cookie

from bano.storage.database import get_user_repo
from bano.storage.user.user_interface import IUserRepository

from bano.core.exceptions import ValidationError, UserNotFound
from bano.core.logx import logger

auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/registration")
def registration(payload: RegisterIn, user_repo: IUserRepository = Depends(get_user_repo)):
    """
    注册并直接登录（写入会话 cookie）
    """
    try:
        session = user_svc.register(
            user_repo=user_repo,
            username=payload.username,
            email=payload.email,
            password=payload.password,
            to_dict=True,
        )
        response = BizResponse(data=session)
        set_session_cookie(response, session["userId"])
        return response
    except ValidationError as e:
        return BizResponse(msg=e.message, status_code=400)
    except Exception as e:
        logger.exception(e)
        return BizResponse(msg="Something went wrong while registering user.", status_code=500)


@auth_router.post("/login")
def login(payload: LoginIn, user_repo: IUserRepository = Depends(get_user_repo)):
    try:
        session = user_svc.login(
            user_repo=user_repo,
            username=payload.username,
            password=payload.password,
            to_dict=True,
        )
        response = BizResponse(data=session)
        set_session_cookie(response, session["userId"])
        return response
    except UserNotFound as e:
        return BizResponse(msg=e.message, status_code=404)
    except ValidationError as e:
        return BizResponse(msg=e.message, status_code=400)
    except Exception as e:
        logger.exception(e)
        return BizResponse(msg="Something went wrong while logging in.", status_code=500)


@auth_router.post("/logout")
def logout():
    response = BizResponse(msg="Logged out successfully.")
    clear_session_cookie(response)
    return response


@auth_router.post("/forgot-password")
def forgot_password(payload: ForgotPasswordIn, user_repo: IUserRepository = Depends(get_user_repo)):
    """
    找回密码：用户名 + 邮箱匹配后设置新密码
    """
    try:
        user_svc.reset_password(
            user_repo=user_repo,
            username=payload.username,
            email=payload.email,
            new_password=payload.password,
        )
        return BizResponse(msg="Password changed.")
    except ValidationError as e:
        return BizResponse(msg=e.message, status_code=400)
    except Exception as e:
        logger.exception(e)
        return BizResponse(msg="Something went wrong while resetting password.", status_code=500)


@auth_router.get("/verify-token")
def verify_token(current_uid: str = Depends(get_current_uid)):
    return BizResponse(data={"userId": current_uid})


@auth_router.get("/get-my-userdata")
def get_my_userdata(
    current_uid: str = Depends(get_current_uid),
    user_repo: IUserRepository = Depends(get_user_repo),
):
    try:
        user = user_svc.get_user(user_repo=user_repo, uid=current_uid, to_dict=True)
        return BizResponse(data=user)
    except UserNotFound as e:
        return BizResponse(msg=e.message, status_code=404)
    except Exception as e:
        logger.exception(e)
        return BizResponse(msg="Something went wrong while getting user data.", status_code=500)
