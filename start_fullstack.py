#!/usr/bin/env python3
"""
Start the EasyJob backend, plus the web frontend when one is checked out
next to it.
"""
import subprocess
import sys
import os
import time
import logging
import signal
import threading
from pathlib import Path

import requests

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

BACKEND_PORT = 8000
FRONTEND_PORT = 5173


class FullStackManager:
    def __init__(self):
        self.backend_process = None
        self.frontend_process = None
        self.project_root = Path(__file__).parent
        self.backend_path = self.project_root / "easyjob_app" / "backend"
        self.frontend_path = self.project_root / "easyjob_app" / "frontend"

    def has_frontend(self):
        return (self.frontend_path / "package.json").exists()

    def check_prerequisites(self):
        """Check if all prerequisites are met"""
        logger.info("Checking prerequisites...")

        if not (self.backend_path / "main.py").exists():
            logger.error("Backend main.py not found")
            return False

        if not self.has_frontend():
            logger.warning("Frontend package.json not found, starting the backend only")
        elif not (self.frontend_path / "node_modules").exists():
            logger.warning("Node modules not found, will need to install")

        logger.info("Prerequisites check passed")
        return True

    def setup_environment(self):
        """Set up environment variables"""
        logger.info("Setting up environment...")

        env = os.environ.copy()
        project_root = str(self.project_root)
        if 'PYTHONPATH' in env:
            env['PYTHONPATH'] = f"{project_root}{os.pathsep}{env['PYTHONPATH']}"
        else:
            env['PYTHONPATH'] = project_root

        # Values from .env or the shell take precedence
        for key, value in {
            'ENVIRONMENT': 'development',
            'DATABASE_URL': 'sqlite:///./easyjob.db',
            'CORS_ENABLED': 'true',
            'API_DOCS_ENABLED': 'true',
            'LOG_LEVEL': 'INFO',
        }.items():
            env.setdefault(key, value)

        if not env.get('GOOGLE_API_KEY'):
            logger.warning("GOOGLE_API_KEY is not set; AI features will answer with a configuration error")

        return env

    def install_frontend_deps(self):
        """Install frontend dependencies if needed"""
        if not self.has_frontend() or (self.frontend_path / "node_modules").exists():
            return True

        logger.info("Installing frontend dependencies...")
        try:
            subprocess.run(
                ["npm", "install"],
                cwd=self.frontend_path,
                check=True,
                capture_output=True,
                text=True
            )
            logger.info("Frontend dependencies installed")
            return True
        except subprocess.CalledProcessError as e:
            logger.error("Failed to install frontend dependencies: %s", e)
            return False

    def _stream_output(self, process, label):
        def read_output():
            for line in iter(process.stdout.readline, ''):
                print(f"[{label}] {line.strip()}")

        threading.Thread(target=read_output, daemon=True).start()

    def start_backend(self, env):
        """Start the FastAPI backend"""
        logger.info("Starting backend server...")

        try:
            self.backend_process = subprocess.Popen(
                [sys.executable, "-m", "uvicorn", "easyjob_app.backend.main:app", "--reload",
                 "--host", "0.0.0.0", "--port", str(BACKEND_PORT)],
                cwd=self.project_root,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
            )
        except OSError as e:
            logger.error("Failed to start backend: %s", e)
            return False

        self._stream_output(self.backend_process, "BACKEND")
        logger.info("Backend server starting on http://localhost:%d", BACKEND_PORT)
        return True

    def start_frontend(self):
        """Start the web frontend dev server"""
        logger.info("Starting frontend server...")

        try:
            self.frontend_process = subprocess.Popen(
                ["npm", "run", "dev"],
                cwd=self.frontend_path,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
                env=dict(os.environ, BROWSER="none")
            )
        except OSError as e:
            logger.error("Failed to start frontend: %s", e)
            return False

        self._stream_output(self.frontend_process, "FRONTEND")
        logger.info("Frontend server starting on http://localhost:%d", FRONTEND_PORT)
        return True

    def wait_for_services(self):
        """Wait for the backend health check to answer"""
        logger.info("Waiting for services to start...")

        url = f"http://localhost:{BACKEND_PORT}/health"
        for _ in range(20):
            try:
                response = requests.get(url, timeout=2)
                if response.status_code == 200:
                    logger.info("Backend is responding")
                    break
            except requests.RequestException:
                pass
            time.sleep(0.5)
        else:
            logger.warning("Could not verify backend status at %s", url)

        logger.info("Backend API docs: http://localhost:%d/docs", BACKEND_PORT)

    def cleanup(self):
        """Clean up processes"""
        logger.info("Shutting down services...")

        for process in (self.frontend_process, self.backend_process):
            if process:
                process.terminate()
                try:
                    process.wait(timeout=5)
                except subprocess.TimeoutExpired:
                    process.kill()

        logger.info("Services shut down")

    def run(self):
        """Run the application"""
        try:
            if not self.check_prerequisites():
                return False

            if not self.install_frontend_deps():
                return False

            env = self.setup_environment()

            if not self.start_backend(env):
                return False

            time.sleep(3)

            if self.has_frontend() and not self.start_frontend():
                return False

            self.wait_for_services()

            logger.info("Press Ctrl+C to stop the servers")
            try:
                while True:
                    time.sleep(1)
            except KeyboardInterrupt:
                logger.info("Shutdown requested...")

        finally:
            self.cleanup()

        return True


def main():
    print("🚀 Starting EasyJob...")

    manager = FullStackManager()

    def signal_handler(sig, frame):
        logger.info("Received interrupt signal")
        manager.cleanup()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)

    success = manager.run()
    if not success:
        print("❌ Failed to start EasyJob")
        sys.exit(1)


if __name__ == "__main__":
    main()
