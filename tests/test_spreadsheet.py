import random
from io import BytesIO

from openpyxl import Workbook, load_workbook

from tourcrm.models.domain import Address, ClientRecord, Coordinate
from tourcrm.services.clients.spreadsheet import EXPORT_COLUMNS, UNNAMED_COMPANY, export_clients, import_clients


def _workbook_bytes(rows: list[list]) -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    for row in rows:
        worksheet.append(row)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def test_export_writes_header_and_rows():
    record = ClientRecord(
        id="C1",
        company_name="Salone Aurora",
        coordinate=Coordinate(41.9, 12.4),
        first_name="Anna",
        last_name="Verdi",
        address=Address(city="Roma", street="Via Appia", number="12", postal_code="00183", region="RM"),
        phone="061234",
        email="anna@aurora.it",
        tax_id="IT999",
        website="aurora.it",
    )

    worksheet = load_workbook(BytesIO(export_clients([record]))).active
    rows = list(worksheet.iter_rows(values_only=True))

    assert rows[0] == EXPORT_COLUMNS
    assert rows[1] == ("C1", "Salone Aurora", "Anna", "Verdi", "061234", "anna@aurora.it", "Roma", "Via Appia", "12", "00183", "RM", "IT999", "aurora.it")


def test_import_maps_english_headers():
    payload = _workbook_bytes(
        [
            ["Company", "First Name", "Last Name", "Phone", "Email", "City", "Street", "Postal Code", "Region", "Tax ID"],
            ["Studio Luce", "Paolo", "Neri", "0201", "p@luce.it", "Milano", "Corso Como 5", "20154", "MI", "IT111"],
        ]
    )
    [record] = import_clients(payload, random.Random(1))

    assert record.company_name == "Studio Luce"
    assert record.first_name == "Paolo"
    assert record.address.city == "Milano"
    assert record.address.street == "Corso Como 5"
    assert record.address.postal_code == "20154"
    assert record.tax_id == "IT111"
    assert record.id


def test_import_accepts_italian_headers_and_numbers():
    payload = _workbook_bytes(
        [
            ["Ragione Sociale", "Nome", "Cellulare", "Città", "CAP", "Provincia", "Partita IVA"],
            ["Barberia Sud", "Luca", 3331234567, "Bari", 70121, "BA", "IT222"],
        ]
    )
    [record] = import_clients(payload)

    assert record.company_name == "Barberia Sud"
    assert record.phone == "3331234567"
    assert record.address.postal_code == "70121"
    assert record.address.region == "BA"


def test_unresolvable_rows_still_produce_records():
    payload = _workbook_bytes(
        [
            ["Company", "Unknown Column"],
            [None, "whatever"],
            [None, None],
        ]
    )
    records = import_clients(payload)

    assert len(records) == 1
    assert records[0].company_name == UNNAMED_COMPANY
    assert records[0].phone == ""
    assert records[0].notes == []


def test_imported_records_get_distinct_ids():
    payload = _workbook_bytes([["Company"], ["A"], ["B"], ["C"]])
    records = import_clients(payload)
    assert len({r.id for r in records}) == 3


def test_exported_address_and_website_import_into_their_own_fields():
    record = ClientRecord(
        id="C1",
        company_name="Salone Aurora",
        coordinate=Coordinate(41.9, 12.4),
        address=Address(city="Roma", street="Via Appia", number="12"),
        website="aurora.it",
    )

    [imported] = import_clients(export_clients([record]), random.Random(2))

    assert imported.address.street == "Via Appia"
    assert imported.address.number == "12"
    assert imported.website == "aurora.it"
    assert imported.id != "C1"
