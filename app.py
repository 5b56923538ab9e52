"""
Report-to-Ledger Converter - Flask Web API
Upload POS / payroll reports, download consolidated tables and journal imports
"""

import io
import os
import tempfile
import zipfile
from datetime import datetime

from flask import Flask, Response, jsonify, request, send_file
from werkzeug.utils import secure_filename

from config import (FLASK_DEBUG, FLASK_HOST, FLASK_PORT, MAX_UPLOAD_BYTES, MAX_WORKERS,
                    OUTPUT_FILES, SUPPORTED_REPORT_EXTENSIONS)
from parsers import ParsedDocument, PDFTextExtractor, resolve_store_id
from processors import OutputGenerator, convert_payroll_documents, convert_pos_documents

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = MAX_UPLOAD_BYTES


class RequestError(ValueError):
    """Bad input from the client (answered with 400)"""


def allowed_file(filename):
    return os.path.splitext(filename)[1].lower() in SUPPORTED_REPORT_EXTENSIONS


def _request_params():
    """Form fields for uploads, JSON body otherwise"""
    if request.files:
        return request.form
    return request.get_json(silent=True) or {}


def get_request_documents():
    """
    Collect report documents from the request

    Accepts multipart uploads under 'files' or a JSON body
    {"documents": [{"text": ..., "filename": ..., "store_id": ...}]}
    """
    uploads = request.files.getlist('files')
    if uploads:
        extractor = PDFTextExtractor()
        documents = []
        with tempfile.TemporaryDirectory() as temp_dir:
            for upload in uploads:
                filename = secure_filename(upload.filename or '')
                if not filename or not allowed_file(filename):
                    raise RequestError(f"Unsupported file: {upload.filename!r}. "
                                       f"Supported: {', '.join(SUPPORTED_REPORT_EXTENSIONS)}")
                path = os.path.join(temp_dir, filename)
                upload.save(path)
                documents.append(extractor.parse_file(path))
        return documents

    payload = request.get_json(silent=True) or {}
    entries = payload.get('documents') or []
    if not isinstance(entries, list):
        raise RequestError("'documents' must be a list")

    documents = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict) or not isinstance(entry.get('text'), str):
            raise RequestError(f"documents[{index}] needs a 'text' string")
        filename = entry.get('filename') or f"document_{index + 1}.txt"
        store_id = entry.get('store_id') or resolve_store_id(entry['text'], filename)
        documents.append(ParsedDocument(store_id=store_id, text=entry['text'], filename=filename))

    if not documents:
        raise RequestError('No report files uploaded')
    return documents


@app.errorhandler(RequestError)
def handle_request_error(error):
    return jsonify({'error': str(error)}), 400


@app.errorhandler(ValueError)
def handle_value_error(error):
    return jsonify({'error': str(error)}), 400


@app.errorhandler(413)
def handle_too_large(error):
    return jsonify({'error': f'Upload exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)} MB'}), 413


@app.route('/api/status')
def api_status():
    """API health check"""
    return jsonify({
        'status': 'ok',
        'supported_extensions': SUPPORTED_REPORT_EXTENSIONS,
        'timestamp': datetime.now().isoformat()
    })


@app.route('/api/pos/consolidated', methods=['POST'])
def api_pos_consolidated():
    """Consolidated store table as CSV (or ?format=xlsx)"""
    documents = get_request_documents()
    params = _request_params()
    results = convert_pos_documents(documents, journal_date=params.get('date'), max_workers=MAX_WORKERS)

    if request.args.get('format') == 'xlsx':
        content = OutputGenerator().generate_consolidated_xlsx(results['table'])
        return send_file(
            io.BytesIO(content),
            as_attachment=True,
            download_name=OUTPUT_FILES['CONSOLIDATED_XLSX'],
            mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )

    return Response(
        results['consolidated_csv'],
        mimetype='text/csv',
        headers={'Content-Disposition': f"attachment; filename={OUTPUT_FILES['CONSOLIDATED']}"}
    )


@app.route('/api/pos/journals', methods=['POST'])
def api_pos_journals():
    """ZIP of one journal CSV per store"""
    documents = get_request_documents()
    params = _request_params()
    results = convert_pos_documents(documents, journal_date=params.get('date'), max_workers=MAX_WORKERS)

    # Create ZIP file in memory
    zip_buffer = io.BytesIO()
    with zipfile.ZipFile(zip_buffer, 'w', zipfile.ZIP_DEFLATED) as zip_file:
        for filename, content in results['journal_files'].items():
            zip_file.writestr(filename, content)
    zip_buffer.seek(0)

    response = send_file(
        zip_buffer,
        as_attachment=True,
        download_name=OUTPUT_FILES['JOURNALS_ZIP'],
        mimetype='application/zip'
    )
    needs_review = results['summary']['needs_review']
    if needs_review:
        response.headers['X-Needs-Review'] = ','.join(needs_review)
    return response


@app.route('/api/payroll/journal', methods=['POST'])
def api_payroll_journal():
    """Payroll journal CSV for one location"""
    params = _request_params()
    journal_no = str(params.get('journal_no') or '').strip()
    if not journal_no:
        raise RequestError("'journal_no' is required")

    documents = get_request_documents()
    results = convert_payroll_documents(documents, journal_no, journal_date=params.get('date'))

    journal = results['journal']
    headers = {'Content-Disposition': f"attachment; filename={results['filename']}"}
    if journal.needs_review:
        headers['X-Needs-Review'] = journal.review_reason
    return Response(results['journal_csv'], mimetype='text/csv', headers=headers)


if __name__ == '__main__':
    print("="*70)
    print("  REPORT-TO-LEDGER CONVERTER - Web API")
    print("="*70)
    print(f"  URL: http://{FLASK_HOST}:{FLASK_PORT}")
    print("-"*70)
    print("  API Endpoints:")
    print("    GET  /api/status            - Health check")
    print("    POST /api/pos/consolidated  - Consolidated store table (CSV, ?format=xlsx)")
    print("    POST /api/pos/journals      - Per-store journal CSVs (ZIP)")
    print("    POST /api/payroll/journal   - Payroll journal CSV")
    print("="*70)
    print("\n[*] Starting server...")
    app.run(debug=FLASK_DEBUG, host=FLASK_HOST, port=FLASK_PORT)
