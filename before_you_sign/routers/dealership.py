from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import RedirectResponse, HTMLResponse
from starlette.status import HTTP_302_FOUND
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..core.guards import require_role
from ..core.sessions import SessionContext
from ..core.template_engine import templates
from ..models import Role, DealershipProfile

router = APIRouter(prefix="/dealership", tags=["Dealership"])

dealership_only = require_role(Role.DEALERSHIP)


@router.get("/", response_class=HTMLResponse)
def dealership_home_redirect(ctx: SessionContext = Depends(dealership_only)):
    return RedirectResponse(url="/dealership/dashboard", status_code=HTTP_302_FOUND)


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request, ctx: SessionContext = Depends(dealership_only), db: Session = Depends(get_db)):
    profile = db.query(DealershipProfile).filter(DealershipProfile.user_id == ctx.user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Dealership profile not found")

    return templates.TemplateResponse(
        request,
        "dealership/dashboard.html",
        {"title": "Dealership Dashboard", "session": ctx, "dealership": profile},
    )
