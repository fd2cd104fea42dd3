import os
import shutil
import uuid

from flask import Flask, current_app, jsonify, request, send_from_directory, url_for
from flask_cors import CORS
from werkzeug.utils import secure_filename

from .config import Config
from .errors import CorruptStreamError, InputTooLargeError, OutputTooLargeError
from .files import compress_file, decompress_file


# -----------------------------------------------------------
# FLASK APP SETUP
# -----------------------------------------------------------
def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.from_prefixed_env("FILE_COMPRESSOR")
    if test_config is not None:
        app.config.from_mapping(test_config)
    CORS(app)

    register_routes(app)
    return app


# -----------------------------------------------------------
# HELPER FUNCTIONS
# -----------------------------------------------------------
def storage_dir(*parts):
    path = os.path.join(current_app.config["STORAGE_DIR"], *parts)
    os.makedirs(path, exist_ok=True)
    return path


def request_dirs():
    """Fresh (token, upload dir, result dir) so concurrent requests never share files."""
    token = uuid.uuid4().hex
    return token, storage_dir("uploads", token), storage_dir("results", token)


def error_response(message, status):
    return jsonify({"success": False, "error": message}), status


def read_upload():
    """Return (file, safe filename, error response) for the "file" form field."""
    file = request.files.get("file")
    if not file:
        return None, None, error_response("No file uploaded", 400)

    filename = secure_filename(file.filename or "")
    if not filename:
        return None, None, error_response("Invalid file name", 400)
    return file, filename, None


# -----------------------------------------------------------
# ROUTES
# -----------------------------------------------------------
def register_routes(app):

    @app.route("/")
    def home():
        return jsonify({
            "name": "file-compressor",
            "compressed_extension": app.config["COMPRESSED_EXTENSION"],
            "endpoints": {
                "compress": url_for("compress_file_route"),
                "decompress": url_for("decompress_file_route"),
            },
        })

    @app.route("/compress_file", methods=["POST"])
    def compress_file_route():
        file, filename, error = read_upload()
        if error:
            return error

        token, upload_dir, result_dir = request_dirs()
        input_path = os.path.join(upload_dir, filename)
        compressed_filename = filename + app.config["COMPRESSED_EXTENSION"]
        compressed_path = os.path.join(result_dir, compressed_filename)
        try:
            file.save(input_path)
            stats = compress_file(input_path, compressed_path)
        except InputTooLargeError as e:
            app.logger.warning("Refusing to compress %s: %s", filename, e)
            shutil.rmtree(result_dir, ignore_errors=True)
            return error_response(str(e), 413)
        except Exception:
            app.logger.exception("Error in /compress_file")
            shutil.rmtree(result_dir, ignore_errors=True)
            return error_response("Internal server error", 500)
        finally:
            shutil.rmtree(upload_dir, ignore_errors=True)

        return jsonify({
            "success": True,
            "filename": filename,
            "compressed_filename": compressed_filename,
            **stats.as_dict(),
            "download_url": url_for("download_file", token=token, filename=compressed_filename),
        })

    @app.route("/decompress_file", methods=["POST"])
    def decompress_file_route():
        file, filename, error = read_upload()
        if error:
            return error

        extension = app.config["COMPRESSED_EXTENSION"]
        if not filename.endswith(extension) or filename == extension:
            return error_response("Invalid file type", 400)

        token, upload_dir, result_dir = request_dirs()
        input_path = os.path.join(upload_dir, filename)
        output_filename = filename[:-len(extension)]  # remove ".huff"
        output_path = os.path.join(result_dir, output_filename)
        try:
            file.save(input_path)
            stats = decompress_file(
                input_path, output_path,
                max_output=app.config["MAX_DECOMPRESSED_SIZE"],
            )
        except CorruptStreamError as e:
            app.logger.warning("Corrupt upload %s: %s", filename, e)
            shutil.rmtree(result_dir, ignore_errors=True)
            return error_response(f"Corrupt compressed file: {e}", 400)
        except OutputTooLargeError as e:
            app.logger.warning("Refusing to decompress %s: %s", filename, e)
            shutil.rmtree(result_dir, ignore_errors=True)
            return error_response(str(e), 413)
        except Exception:
            app.logger.exception("Error in /decompress_file")
            shutil.rmtree(result_dir, ignore_errors=True)
            return error_response("Internal server error", 500)
        finally:
            shutil.rmtree(upload_dir, ignore_errors=True)

        return jsonify({
            "success": True,
            "original_huff": filename,
            "decompressed_file": output_filename,
            "compressed_size": stats.compressed_size,
            "decompressed_size": stats.original_size,
            "download_url": url_for("download_file", token=token, filename=output_filename),
        })

    @app.route("/download/<token>/<filename>")
    def download_file(token, filename):
        # send_from_directory rejects paths that escape the results directory
        results = os.path.join(current_app.config["STORAGE_DIR"], "results")
        return send_from_directory(
            results,
            f"{secure_filename(token)}/{secure_filename(filename)}",
            as_attachment=True,
            mimetype="application/octet-stream",
        )
