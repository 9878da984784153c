from datetime import datetime

from sme_assessment.models.report import PdfReport
from sme_assessment.services.pdf_report import ReportData, band_color, band_label, render_assessment_pdf


def test_band_label():
    assert band_label("needs_improvement") == "Needs Improvement"
    assert band_label("strong") == "Strong"
    assert band_label(None) == "N/A"


def test_band_color():
    assert band_color("needs_improvement") == "#E53E3E"
    assert band_color("below_average") == "#ED8936"
    assert band_color("moderate") == "#ECC94B"
    assert band_color("strong") == "#48BB78"
    assert band_color("unheard_of") == "#718096"
    assert band_color(None) == "#718096"


def test_render_handles_missing_values():
    data = ReportData(
        business_name="Tiny <Shop> & Co",
        sector="",
        completed_at=None,
        summary={"composite_mean": None, "composite_percentage": None, "performance_band": None},
    )

    pdf = render_assessment_pdf(data)

    assert pdf.startswith(b"%PDF")


def test_render_with_theme_scores():
    data = ReportData(
        business_name="Acme Bakery",
        sector="Food & Beverage",
        completed_at=datetime(2026, 3, 1, 10, 30),
        summary={"composite_mean": 3.5, "composite_percentage": 62.5, "performance_band": "moderate"},
        theme_scores=[
            {"theme_id": 1, "theme_name": "Market", "mean_score": 3.0, "percentage": 50.0, "performance_band": "below_average"},
            {"theme_id": 2, "theme_name": "Finance", "mean_score": 4.0, "percentage": 75.0, "performance_band": "moderate"},
        ],
    )

    assert render_assessment_pdf(data).startswith(b"%PDF")


def test_download_pdf(client, db, auth_headers, completed_assessment):
    assessment_id = completed_assessment["id"]

    response = client.get(f"/api/v1/reports/{assessment_id}/pdf", headers=auth_headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == (
        f'attachment; filename="assessment-report-{assessment_id}.pdf"'
    )
    assert response.content.startswith(b"%PDF")

    record = db.query(PdfReport).filter_by(assessment_id=assessment_id).one()
    assert record.file_size == len(response.content)
    assert (record.expires_at - record.created_at).days in (29, 30)


def test_pdf_requires_completed_assessment(client, auth_headers, profile, survey):
    created = client.post("/api/v1/assessments/", headers=auth_headers).json()

    response = client.get(f"/api/v1/reports/{created['id']}/pdf", headers=auth_headers)
    assert response.status_code == 404


def test_pdf_for_other_user_is_not_found(client, other_headers, completed_assessment):
    response = client.get(f"/api/v1/reports/{completed_assessment['id']}/pdf", headers=other_headers)
    assert response.status_code == 404
