import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.exceptions import register_exception_handlers
from app.routers import auth_router, user_router, profile_router

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from app.models import user
from app.models import profile
from app.models import post


# 設定基礎日誌
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(title="DevConnector API")

# --- 設定 CORS (跨來源資源共用) ---
# 允許所有來源 (在生產環境中應限制)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- 統一錯誤格式 ---
register_exception_handlers(app)

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"status": "success", "message": "API Running"}

# --- 載入 API 路由 ---
app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(profile_router.router)
