"""Report metadata declared for the surrounding reporting tools."""

REPORT_CODE = "bhl_accessions_report"
REPORT_TITLE = "Bentley Historical Library Accessions Report"

# Output columns, in display order
HEADERS = (
    "identifier",
    "donor_name",
    "donor_number",
    "accession_date",
    "content_description",
    "processing_status",
    "processing_priority",
    "classifications",
    "extent_number_type",
    "location",
)
