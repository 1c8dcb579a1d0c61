from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class RegisterIn(BaseModel):
    """
    注册请求：字段全部可选，缺失由业务层统一返回 400
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class LoginIn(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class ForgotPasswordIn(BaseModel):
    """
    找回密码：用户名 + 邮箱匹配后直接设置新密码
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class UserCreate(BaseModel):
    """
    创建用户（内部调用，password 已经是哈希）
    """
    username: str
    email: str
    password: str

    model_config = ConfigDict(from_attributes=True, extra="forbid")


class UserOut(BaseModel):
    """
    对外返回的用户信息（不包含密码哈希）
    """
    uid: str = Field(serialization_alias="_id")
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserAllOut(BaseModel):
    """
    用户所有信息（包含密码哈希，仅供业务层校验使用）
    """
    uid: str
    username: str
    email: str
    password: str

    model_config = ConfigDict(from_attributes=True)


class SessionOut(BaseModel):
    """
    注册 / 登录成功后的响应体
    """
    username: str
    user_id: str = Field(serialization_alias="userId")
