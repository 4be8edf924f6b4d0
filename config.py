"""Environment-based configuration settings"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

BASE_DIR = Path(__file__).parent

# Display name printed in the page header and on certificates
ACADEMY_NAME = os.getenv('ACADEMY_NAME', 'AbuAmmar Tech Academy')

# Static course catalog, read once at startup
CATALOG_PATH = Path(os.getenv('ACADEMY_CATALOG_PATH', BASE_DIR / 'data' / 'catalog.json'))

# Where rendered certificates are written before the browser downloads them
CERTIFICATE_DIR = Path(os.getenv('ACADEMY_CERTIFICATE_DIR', 'certificates'))

# Logging settings
LOG_LEVEL = os.getenv('ACADEMY_LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Server settings
SERVER_NAME = os.getenv('ACADEMY_SERVER_NAME', '127.0.0.1')
SERVER_PORT = int(os.getenv('ACADEMY_SERVER_PORT', '7860'))
