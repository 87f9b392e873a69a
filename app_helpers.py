"""
Helper functions and decorators for the Flask app.
Upload handling, per-session result cache and the EDA/training handlers.
"""

import os
import uuid
import functools
import pandas as pd
from flask import session, jsonify, request, current_app
from werkzeug.utils import secure_filename
from typing import Callable, Dict, Any, Tuple

from heart_ml import AnalysisConfig, validate_analysis_config, validate_file_upload
from model_utils import load_clean_dataset, explore_dataset, compare_models, json_ready

# Server-side cache keyed by session id; holds data too large for the cookie
app_cache = {
    'eda_data': {},
    'training_data': {}
}


def api_response(func: Callable) -> Callable:
    """Decorator for standardized API responses with error handling"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            result = func(*args, **kwargs)
            if isinstance(result, (dict, list)):
                return jsonify(result)
            return result
        except ValueError as e:
            current_app.logger.warning(f"Rejected request in {func.__name__}: {e}")
            return jsonify({'success': False, 'error': str(e)}), 400
        except Exception as e:
            current_app.logger.exception(f"API Error in {func.__name__}: {e}")
            return jsonify({'success': False, 'error': str(e)}), 500
    return wrapper


def require_file(func: Callable) -> Callable:
    """Decorator to ensure a file is uploaded and accessible"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        filepath = session.get('filepath')
        if not filepath or not os.path.exists(filepath):
            return jsonify({
                'success': False,
                'error': 'No uploaded file found. Please upload a dataset first.'
            }), 400
        return func(*args, **kwargs)
    return wrapper


def load_dataframe() -> Tuple[pd.DataFrame, str]:
    """Load and clean the dataset behind the session filepath"""
    filepath = session.get('filepath')
    if not filepath or not os.path.exists(filepath):
        raise ValueError("No valid file found in session")
    return load_clean_dataset(filepath), filepath


def get_session_cache(cache_type: str) -> Dict[str, Any]:
    """Get cached data for current session"""
    session_id = session.get('session_id')
    if not session_id:
        return {}
    return app_cache.get(cache_type, {}).get(session_id, {})


def set_session_cache(cache_type: str, data: Dict[str, Any]) -> None:
    """Set cached data for current session"""
    session_id = session.get('session_id')
    if not session_id:
        session_id = str(uuid.uuid4())
        session['session_id'] = session_id
    app_cache.setdefault(cache_type, {})[session_id] = data


def clear_session_cache() -> None:
    """Clear all cached data for current session"""
    session_id = session.get('session_id')
    if session_id:
        for cache_type in app_cache:
            app_cache[cache_type].pop(session_id, None)


def handle_file_upload() -> Dict[str, Any]:
    """Save the uploaded CSV, load and clean it, and report its shape"""
    clear_session_cache()
    session.clear()

    if 'dataset' not in request.files:
        return {'success': False, 'error': "No file uploaded."}

    file = request.files['dataset']
    is_valid, validation_message = validate_file_upload(file)
    if not is_valid:
        current_app.logger.warning(f"File validation failed: {validation_message}")
        return {'success': False, 'error': validation_message}

    filename = f"{uuid.uuid4().hex}_{secure_filename(file.filename) or 'upload.csv'}"
    filepath = os.path.join(current_app.config['UPLOAD_FOLDER'], filename)
    file.save(filepath)
    current_app.logger.info(f"File saved to: {filepath}")

    try:
        df = load_clean_dataset(filepath)
    except ValueError as e:
        os.remove(filepath)
        current_app.logger.warning(f"Failed to read {file.filename}: {e}")
        return {'success': False, 'error': f"Failed to read the file: {e}"}

    session['filepath'] = filepath
    session['filename'] = file.filename
    session['file_shape'] = list(df.shape)
    session['file_columns'] = list(df.columns)

    preview_data = json_ready({'rows': df.head(5)})['rows']
    return {
        'success': True,
        'file_uploaded': True,
        'file_name': file.filename,
        'file_shape': list(df.shape),
        'columns': list(df.columns),
        'preview_data': preview_data,
        'message': 'File uploaded successfully!'
    }


def handle_eda_processing() -> Dict[str, Any]:
    """Summary statistics and charts for the uploaded dataset"""
    df, filepath = load_dataframe()
    current_app.logger.info(f"Processing EDA for {filepath}: {df.shape}")

    eda = json_ready(explore_dataset(df))
    set_session_cache('eda_data', eda)

    return {
        'success': True,
        'eda': eda,
        'message': 'EDA completed successfully!'
    }


def handle_training() -> Dict[str, Any]:
    """Split, fit the three classifiers and store the comparison"""
    payload = request.get_json(silent=True) or request.form
    config = AnalysisConfig(
        split_ratio=float(payload.get('split', payload.get('split_ratio', 0.8))),
        random_state=int(payload.get('seed', payload.get('random_state', 42)))
    )

    validation_result = validate_analysis_config(config)
    if not validation_result['valid']:
        error_message = "; ".join(validation_result['errors'])
        return {'success': False, 'error': f"Training validation failed: {error_message}"}

    df, filepath = load_dataframe()
    current_app.logger.info(
        f"Training on {filepath}: split={config.split_ratio}, seed={config.random_state}"
    )

    result = json_ready(compare_models(df, config))
    set_session_cache('training_data', result)
    session['best_model_name'] = result['best_model_name']

    return {
        'success': True,
        'training_results': True,
        'best_model': result['best_model_name'],
        'all_results': result['all_results'],
        'confusion': result['confusion'],
        'split': result['split'],
        'chart': result['chart'],
        'message': f"Training completed! Best model: {result['best_model_name']}"
    }
