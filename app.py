"""Flask REST API for Word to PDF conversion"""

import logging
import os

from flask import Flask, current_app, jsonify, request, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, NotFound, RequestEntityTooLarge

from services.conversion_service import convert_docx_to_pdf
from services.lifecycle_service import UploadLifecycle
from services.upload_service import receive_upload
from utils.errors import ConversionError, FileTooLarge, OutputNotFound
from utils.storage import StoragePaths, ensure_storage_dirs
from utils.validators import MAX_FILE_SIZE, WORD_MIMETYPES

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

DEFAULT_CONFIG = {
    'UPLOAD_FOLDER': os.path.join(BASE_DIR, 'uploads'),
    'OUTPUT_FOLDER': os.path.join(BASE_DIR, 'output'),
    'MAX_FILE_SIZE': MAX_FILE_SIZE,
    'ALLOWED_MIMETYPES': WORD_MIMETYPES,
    'CONVERTER': convert_docx_to_pdf,
}


def _storage_paths() -> StoragePaths:
    return current_app.extensions['storage_paths']


def health_check():
    """Health check endpoint"""
    return jsonify({'status': 'healthy'}), 200


async def upload_endpoint():
    """
    Upload a Word document and convert it to PDF

    Request: multipart/form-data with 'file' field (.doc or .docx)
    Response: JSON with upload metadata and the PDF URLs
    {
      "metadata": {"name": "report.docx", "size": 1234, "type": "...", "uploadTime": "..."},
      "pdfUrl": "/download/file-<ts>-<rand>.pdf",
      "fileUrl": "/output/file-<ts>-<rand>.pdf"
    }
    """
    logger.info("Received upload request")

    # Validation errors propagate to the 400 handler; nothing is stored yet
    uploaded = receive_upload(
        request.files.get('file'),
        _storage_paths(),
        field_name='file',
        allowed_mimetypes=current_app.config['ALLOWED_MIMETYPES'],
        max_size=current_app.config['MAX_FILE_SIZE'],
    )

    lifecycle = UploadLifecycle(uploaded, _storage_paths(), current_app.config['CONVERTER'])
    try:
        metadata, _result = await lifecycle.run()
    except ConversionError as e:
        return jsonify({
            'message': 'Error processing file',
            'details': str(e),
        }), 500

    logger.info("Sending response with PDF URLs: %s, %s", metadata.download_url, metadata.file_url)
    return jsonify({
        'metadata': metadata.to_dict(),
        'pdfUrl': metadata.download_url,
        'fileUrl': metadata.file_url,
    }), 200


def download_endpoint(filename):
    """Stream a converted PDF as an attachment"""
    try:
        return send_from_directory(
            _storage_paths().output_dir, filename, as_attachment=True
        )
    except NotFound:
        raise OutputNotFound()


def output_endpoint(filename):
    """Serve files from the output directory as-is"""
    try:
        return send_from_directory(_storage_paths().output_dir, filename)
    except NotFound:
        raise OutputNotFound()


def handle_http_error(error):
    return jsonify({'message': error.description}), error.code


def handle_too_large(error):
    return jsonify({'message': FileTooLarge.description}), 400


def handle_not_found(error):
    # Routes raise OutputNotFound; anything else is an unknown route
    if isinstance(error, OutputNotFound):
        return jsonify({'message': error.description}), 404
    return jsonify({'message': 'Endpoint not found'}), 404


def handle_unexpected_error(error):
    logger.exception("Global error handler")
    return jsonify({'message': str(error) or 'Internal server error'}), 500


def create_app(config=None):
    """
    Build the Flask application

    Args:
        config: Optional mapping merged over DEFAULT_CONFIG

    Returns:
        Configured Flask app with its storage directories created
    """
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    if config:
        app.config.update(config)
    CORS(app, send_wildcard=True)

    paths = StoragePaths(
        upload_dir=os.path.abspath(app.config['UPLOAD_FOLDER']),
        output_dir=os.path.abspath(app.config['OUTPUT_FOLDER']),
    )
    ensure_storage_dirs(paths)
    app.extensions['storage_paths'] = paths

    app.add_url_rule('/health', view_func=health_check, methods=['GET'])
    app.add_url_rule('/upload', view_func=upload_endpoint, methods=['POST'])
    app.add_url_rule('/download/<filename>', view_func=download_endpoint, methods=['GET'])
    app.add_url_rule('/output/<path:filename>', view_func=output_endpoint, methods=['GET'])

    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(RequestEntityTooLarge, handle_too_large)
    app.register_error_handler(NotFound, handle_not_found)
    app.register_error_handler(Exception, handle_unexpected_error)

    return app


app = create_app()


if __name__ == '__main__':
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logger.info("Upload directory: %s", app.config['UPLOAD_FOLDER'])
    logger.info("Output directory: %s", app.config['OUTPUT_FOLDER'])
    app.run(host='0.0.0.0', port=5000)
