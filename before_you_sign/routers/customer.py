from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import RedirectResponse, HTMLResponse
from starlette.status import HTTP_302_FOUND
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..core.guards import require_role
from ..core.sessions import SessionContext
from ..core.template_engine import templates
from ..models import Role, CustomerProfile

router = APIRouter(prefix="/customer", tags=["Customer"])

customer_only = require_role(Role.CUSTOMER)


@router.get("/", response_class=HTMLResponse)
def customer_home_redirect(ctx: SessionContext = Depends(customer_only)):
    return RedirectResponse(url="/customer/dashboard", status_code=HTTP_302_FOUND)


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request, ctx: SessionContext = Depends(customer_only), db: Session = Depends(get_db)):
    profile = db.query(CustomerProfile).filter(CustomerProfile.user_id == ctx.user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Customer profile not found")

    return templates.TemplateResponse(
        request,
        "customer/dashboard.html",
        {"title": "Customer Dashboard", "session": ctx, "customer": profile},
    )
