"""Invoice generation and PDF download routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from tutor_backend.app.core.security import get_current_user
from tutor_backend.app.db.session import get_db
from tutor_backend.app.models.user import User
from tutor_backend.app.schemas.invoice import InvoiceRequest, InvoiceResponse
from tutor_backend.app.services.invoice_formatting import invoice_pdf_filename
from tutor_backend.app.services.invoice_pdf import render_invoice_pdf
from tutor_backend.app.services.invoices import generate_invoice

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _pdf_response(request: InvoiceRequest, db: Session) -> Response:
    invoice = generate_invoice(db, request)
    pdf_bytes = render_invoice_pdf(invoice)
    filename = invoice_pdf_filename(request.month, invoice.invoice_number, request.all_students)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/generate", response_model=InvoiceResponse)
async def generate(
    request: InvoiceRequest, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    return generate_invoice(db, request)


@router.post("/download-pdf")
async def download_invoice_pdf(
    request: InvoiceRequest, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    return _pdf_response(request, db)


@router.post("/download-monthly-pdf")
async def download_monthly_invoice_pdf(
    month: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
):
    return _pdf_response(InvoiceRequest(month=month, all_students=True), db)
