"""
Main application entry point
"""

import os
import sys

from odflow import create_app
from odflow.models.database import check_connection
from odflow.utils import log_info, log_error


def main():
    """Main application entry point"""
    print("=" * 50)
    print("🚀 Starting ODFlow")
    print("=" * 50)

    app = create_app()

    # Test database connection
    with app.app_context():
        if not check_connection():
            log_error("❌ Database connection error")
            print("💡 Check DATABASE_URL or the MYSQL_* settings in .env")
            return False
        log_info("✅ Database connection available")

    port = int(os.environ.get('PORT', 5000))
    print(f"🌐 Starting server on http://localhost:{port}")
    print(f"🔧 Debug mode: {'ON' if app.debug else 'OFF'}")

    app.run(host='0.0.0.0', port=port, debug=app.debug)
    return True


if __name__ == '__main__':
    success = main()
    if not success:
        sys.exit(1)
