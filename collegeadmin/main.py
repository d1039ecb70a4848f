import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from collegeadmin.api import admin, auth, attendance, academics, circulars, classes, faculty, fees, results, students
from collegeadmin.core.config import settings
from collegeadmin.core.errors import ServiceError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="College Administration API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    content = {"detail": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(students.router, prefix="/api/students", tags=["students"])
app.include_router(faculty.router, prefix="/api/faculty", tags=["faculty"])
app.include_router(classes.router, prefix="/api/classes", tags=["classes"])
app.include_router(academics.router, prefix="/api", tags=["academics"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["attendance"])
app.include_router(results.router, prefix="/api/results", tags=["results"])
app.include_router(fees.router, prefix="/api/fees", tags=["fees"])
app.include_router(circulars.router, prefix="/api/circulars", tags=["circulars"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
