"""HTTP API for public registration submissions."""
import logging
from typing import Optional

from flask import Flask, jsonify, request

from src.services.notification_service import build_confirmation_hook
from src.services.registration_service import RegistrationHook, submit_registration
from src.services.storage_service import SupabaseStore
from src.utils.config import DEFAULT_PREFIX, Settings, load_settings
from src.utils.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


def create_app(
    store=None,
    settings: Optional[Settings] = None,
    on_registered: Optional[RegistrationHook] = None,
) -> Flask:
    """
    Create the Flask app serving /register.

    Args:
        store: Record store adapter; built from settings when omitted
        settings: Process settings; loaded from the environment when needed
        on_registered: Post-registration hook; derived from settings when omitted
    """
    if store is None:
        settings = settings or load_settings()
        store = SupabaseStore.from_settings(settings)
    if on_registered is None and settings is not None:
        on_registered = build_confirmation_hook(settings)

    prefix = settings.registration_prefix if settings is not None else DEFAULT_PREFIX

    app = Flask(__name__)
    app.config["REGISTRATION_STORE"] = store

    @app.route("/register", methods=["POST"])
    def register():
        """Validate and store one registration."""
        try:
            payload = request.get_json(silent=True)
            if not isinstance(payload, dict):
                return jsonify({'error': 'Invalid JSON body'}), 400

            registration = submit_registration(
                payload,
                store,
                prefix=prefix,
                on_registered=on_registered,
            )
            return jsonify({
                'success': True,
                'registrationId': registration.registration_id,
                'data': registration.to_record(),
            })

        except ValidationError as e:
            return jsonify({'error': e.message}), 400
        except StoreError:
            logger.exception("Database error while saving registration")
            return jsonify({'error': 'Failed to save registration'}), 500
        except Exception:
            logger.exception("Registration error")
            return jsonify({'error': 'Internal server error'}), 500

    @app.route("/register", methods=["GET"])
    def register_status():
        return jsonify({'message': 'Registration API is working'})

    return app
