# app/core/config.py
# 應用程式設定 (資料庫連線字串、JWT 秘鑰、GitHub 憑證等)
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # 資料庫設定 (非同步驅動，例如 mysql+aiomysql://...)
    DATABASE_URL: str
    # 是否在 console 印出 SQL 語句
    SQL_ECHO: bool = False
    # JWT 設定
    JWT_SECRET_KEY: str
    # JWT 演算法
    JWT_ALGORITHM: str = "HS256"
    # 存取令牌過期時間（分鐘）
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # GitHub 設定 (空字串 = 匿名呼叫)
    GITHUB_CLIENT_ID: str = ""
    GITHUB_SECRET: str = ""
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_TIMEOUT_SECONDS: float = 10.0
    GITHUB_REPO_LIMIT: int = 5

    # 環境變數檔案
    class Config:
        env_file = ".env"

# 建立設定實例
settings = Settings()
