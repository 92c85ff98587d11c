import os
import re

from flask import Flask, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from inspector import BSPHeaderError, analyze

# ── Config ─────────────────────────────────────────────────────────────────────

MAX_UPLOAD_MB = int(os.environ.get('BSP_MAX_UPLOAD_MB', '50'))
UPLOAD_FIELD  = 'maps'

_BSP_NAME_RE = re.compile(r'\.bsp$', re.IGNORECASE)

# ── App ────────────────────────────────────────────────────────────────────────

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = MAX_UPLOAD_MB * 1024 * 1024

# ── Helpers ────────────────────────────────────────────────────────────────────

_ESCAPED_WS_RE = re.compile(r'\\[nrt]')
_CONTROL_RE    = re.compile(r'[\x00-\x1f\x7f]+')
_INVISIBLE_RE  = re.compile(r'[\u00a0\u200b-\u200f\u2028\u2029]+')
_SPACES_RE     = re.compile(r'\s+')


def base_map_name(filename: str) -> str:
    return _BSP_NAME_RE.sub('', filename) if filename else ''


def clean_map_title(name) -> str:
    """Display form of a worldspawn message: escapes and control chars become spaces."""
    if not name:
        return ''
    s = _ESCAPED_WS_RE.sub(' ', str(name))
    s = _CONTROL_RE.sub(' ', s)
    s = _INVISIBLE_RE.sub(' ', s)
    return _SPACES_RE.sub(' ', s).strip()


def _analyze_upload(filename: str, data: bytes) -> dict:
    try:
        result = analyze(data)
    except BSPHeaderError as e:
        app.logger.warning('analysis failed for %s: %s', filename, e)
        return {'file': filename, 'fatal': str(e)}

    entry = {'file': filename, **result.to_dict()}
    # Maps without a worldspawn message are named after their file
    entry['mapName'] = result.map_name or base_map_name(filename) or None
    entry['mapTitle'] = clean_map_title(entry['mapName'])
    return entry


# ── API routes ─────────────────────────────────────────────────────────────────

@app.route('/api/health')
def api_health():
    return jsonify({'status': 'ok'})


@app.route('/api/analyze', methods=['POST'])
def api_analyze():
    """Analyze one or more uploaded .bsp files (multipart field "maps").

    Each file is analyzed on its own; a file too short for a BSP header gets a
    "fatal" entry instead of failing the whole request.
    """
    files = [f for f in request.files.getlist(UPLOAD_FIELD) if f.filename]
    if not files:
        return jsonify({'error': 'no files uploaded'}), 400

    for f in files:
        if not _BSP_NAME_RE.search(f.filename):
            app.logger.warning('rejected upload %s', f.filename)
            return jsonify({'error': 'only .bsp files are accepted', 'filename': f.filename}), 400

    results = [_analyze_upload(f.filename, f.read()) for f in files]
    return jsonify({'results': results})


@app.errorhandler(RequestEntityTooLarge)
def too_large(e):
    return jsonify({'error': f'upload exceeds {MAX_UPLOAD_MB} MB'}), 413


# ── Dev server ─────────────────────────────────────────────────────────────────

if __name__ == '__main__':
    debug = os.environ.get('FLASK_DEBUG', 'true').lower() == 'true'
    port = int(os.environ.get('PORT', '3001'))
    app.run(debug=debug, host='0.0.0.0', port=port)
