from fastapi import APIRouter, Request, Depends
from fastapi.responses import RedirectResponse, HTMLResponse
from starlette.status import HTTP_302_FOUND
from sqlalchemy.orm import Session
from sqlalchemy import func

from ..core.db import get_db
from ..core.guards import require_role
from ..core.sessions import SessionContext
from ..core.template_engine import templates
from ..models import User, Role, DealershipProfile, CustomerProfile

router = APIRouter(prefix="/admin", tags=["Admin"])

admin_only = require_role(Role.ADMIN)


# ------------------------------------------------
# 🏠 Admin Home → Redirect
# ------------------------------------------------
@router.get("/", response_class=HTMLResponse)
def admin_home_redirect(ctx: SessionContext = Depends(admin_only)):
    return RedirectResponse(url="/admin/dashboard", status_code=HTTP_302_FOUND)


# ------------------------------------------------
# 📋 Dashboard – Accounts by role + recent sign-ups
# ------------------------------------------------
@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request, ctx: SessionContext = Depends(admin_only), db: Session = Depends(get_db)):
    role_counts = {role: 0 for role in Role}
    for role, count in db.query(User.role, func.count(User.id)).group_by(User.role).all():
        role_counts[role] = count

    recent_dealerships = (
        db.query(DealershipProfile).order_by(DealershipProfile.id.desc()).limit(10).all()
    )
    recent_customers = (
        db.query(CustomerProfile).order_by(CustomerProfile.id.desc()).limit(10).all()
    )

    return templates.TemplateResponse(
        request,
        "admin/dashboard.html",
        {
            "title": "Admin Dashboard",
            "session": ctx,
            "total_users": sum(role_counts.values()),
            "total_admins": role_counts[Role.ADMIN],
            "total_dealerships": role_counts[Role.DEALERSHIP],
            "total_customers": role_counts[Role.CUSTOMER],
            "recent_dealerships": recent_dealerships,
            "recent_customers": recent_customers,
        },
    )
