from datetime import datetime

from pydantic import BaseModel, Field


class ImportRequestDTO(BaseModel):
    """CSV text produced by the export endpoint (or an older export)."""

    csv: str = Field(
        description="Full export text",
        examples=[
            "Loan Export: Alex Johnson\n"
            "Start Date: 2024-01-01\n"
            "Interest Rate: 8.00%\n"
            "\n"
            "Date,Type,Amount,Principal Paid,Interest Paid,Notes\n"
            "2024-01-01,Investment,10000.00,,,Initial loan\n"
        ],
    )


class ImportPreviewDTO(BaseModel):
    borrower_name: str
    start_date: datetime
    annual_interest_rate: str
    entry_count: int
    total_investments: str
    total_payments: str
