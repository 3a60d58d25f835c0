from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from zuhri.core.config import settings
from zuhri.core.logging import configure_logging
from zuhri.core.scheduler import start_scheduler, stop_scheduler
from zuhri.endpoints import auth, account, course, lesson, exam, certificate, diploma_template, admin
from zuhri.middleware.exceptions import global_exception_handler, http_exception_handler, validation_exception_handler
from zuhri.middleware.logging import RequestLoggingMiddleware

configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json"
)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_origin_regex=settings.ALLOWED_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["Auth"])
app.include_router(account.router, prefix=settings.API_PREFIX, tags=["Account"])
app.include_router(course.router, prefix=settings.API_PREFIX, tags=["Courses"])
app.include_router(lesson.router, prefix=settings.API_PREFIX, tags=["Lessons"])
app.include_router(exam.router, prefix=settings.API_PREFIX, tags=["Exams"])
app.include_router(certificate.router, prefix=settings.API_PREFIX, tags=["Certificates"])
app.include_router(diploma_template.router, prefix=settings.API_PREFIX, tags=["Diploma Templates"])
app.include_router(admin.router, prefix=f"{settings.API_PREFIX}/admin", tags=["Admin"])

@app.get(f"{settings.API_PREFIX}/health", tags=["Health"])
def health_check():
    return {"status": "ok", "version": settings.VERSION}

@app.on_event("startup")
async def startup_event():
    start_scheduler()

@app.on_event("shutdown")
async def shutdown_event():
    stop_scheduler()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
