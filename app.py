"""
Flask front end for the heart-disease analysis.
Upload a CSV, inspect its cleaned summary and charts, then compare the
three classifiers and export the comparison table.
"""

import os
import pandas as pd
from flask import Flask, render_template, request, session, make_response

from heart_ml import calculate_split_percentages, comparison_table_to_csv
from heart_ml.config import METRIC_COLUMNS
from app_helpers import (
    api_response, require_file, get_session_cache, clear_session_cache,
    handle_file_upload, handle_eda_processing, handle_training
)
from model_utils import configure_logging

UPLOAD_FOLDER = 'uploads'


def create_app(upload_folder: str = UPLOAD_FOLDER) -> Flask:
    """Application factory; tests pass a temporary upload folder."""
    app = Flask(__name__)
    app.secret_key = os.environ.get('SECRET_KEY') or os.urandom(24)
    app.config['UPLOAD_FOLDER'] = upload_folder
    app.config['MAX_CONTENT_LENGTH'] = 5 * 1024 * 1024  # 5MB max file size
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    @app.route('/', methods=['GET', 'POST'])
    def index():
        """Main page: file picker and results panels."""
        if request.method == 'POST':
            return upload()
        return render_template('index.html')

    @api_response
    def upload():
        return handle_file_upload()

    @app.route('/process_eda', methods=['POST'])
    @api_response
    @require_file
    def process_eda():
        """Summary statistics and charts for the uploaded dataset."""
        return handle_eda_processing()

    @app.route('/train', methods=['POST'])
    @api_response
    @require_file
    def train():
        """Fit the classifiers and store the comparison."""
        return handle_training()

    @app.route('/eda', methods=['GET'])
    @api_response
    def get_eda():
        """Cached EDA results as JSON."""
        return get_session_cache('eda_data')

    @app.route('/model_comparison', methods=['GET'])
    @api_response
    def model_comparison():
        """All model metrics in evaluation order."""
        return get_session_cache('training_data').get('all_results', [])

    @app.route('/calculate_split', methods=['POST'])
    @api_response
    def calculate_split():
        """Calculate train/test split percentages"""
        data = request.get_json(silent=True) or {}
        split_ratio = float(data.get('split_ratio', 0.8))
        train_percent, test_percent = calculate_split_percentages(split_ratio)
        return {
            'success': True,
            'train_percent': train_percent,
            'test_percent': test_percent,
            'split_ratio': split_ratio
        }

    @app.route('/export_results')
    def export_results():
        """Export the comparison table as CSV."""
        training = get_session_cache('training_data')
        all_results = training.get('all_results', [])
        if not all_results:
            return "No training results available for export.", 404

        table = pd.DataFrame(all_results, columns=['Model'] + METRIC_COLUMNS)
        response = make_response(comparison_table_to_csv(table, training.get('best_model_name')))
        response.headers['Content-Type'] = 'text/csv'
        response.headers['Content-Disposition'] = 'attachment; filename=model_comparison.csv'
        return response

    @app.route('/reset_session', methods=['POST'])
    @api_response
    def reset_session():
        """Forget the uploaded file and cached results."""
        clear_session_cache()
        session.clear()
        return {'message': 'Session cleared successfully'}

    return app


if __name__ == "__main__":
    configure_logging()
    create_app().run(host='127.0.0.1', port=5002)
