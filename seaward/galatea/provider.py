"""
Galatea activation over SSH.

The Galatea binary is expected next to `remote_path` on the user's device.
If it is missing it is downloaded from GALATEA_RELEASE and uploaded over SFTP;
either way it is made executable and launched in the background.

These functions block; call them from a worker thread.
"""

from typing import Any, Dict, Optional, Tuple
import io
import logging
import posixpath
import shlex
import tempfile

import httpx
import paramiko

from seaward.config import DEFAULT_GALATEA_PATH, get_galatea_release

logger = logging.getLogger(__name__)

SSH_TIMEOUT_SECONDS = 30
DOWNLOAD_TIMEOUT_SECONDS = 300


class GalateaError(Exception):
    """Raised when Galatea cannot be installed or started on a device."""


def _load_private_key(private_key: str) -> paramiko.PKey:
    for key_class in (paramiko.Ed25519Key, paramiko.ECDSAKey, paramiko.RSAKey):
        try:
            return key_class.from_private_key(io.StringIO(private_key))
        except paramiko.SSHException:
            continue
    raise GalateaError("Unsupported or invalid private key")


def _connect(ssh_config: Dict[str, Any]) -> paramiko.SSHClient:
    client = paramiko.SSHClient()
    client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
    private_key = ssh_config.get("privateKey")
    client.connect(
        hostname=ssh_config["host"],
        port=ssh_config.get("port") or 22,
        username=ssh_config["username"],
        password=ssh_config.get("password"),
        pkey=_load_private_key(private_key) if private_key else None,
        timeout=SSH_TIMEOUT_SECONDS,
        look_for_keys=False,
        allow_agent=False,
    )
    return client


def _exec(client: paramiko.SSHClient, command: str, cwd: str) -> Tuple[int, str, str]:
    """Run a command in `cwd`, returning (exit status, stdout, stderr)."""
    _, stdout, stderr = client.exec_command(f"cd {shlex.quote(cwd)} && {command}")
    exit_status = stdout.channel.recv_exit_status()
    return exit_status, stdout.read().decode(errors="replace"), stderr.read().decode(errors="replace")


def _start_galatea(client: paramiko.SSHClient, remote_path: str) -> None:
    """
    Make the binary executable and launch it detached from the SSH session.

    Raises:
        GalateaError: If either command writes to stderr
    """
    remote_dir = posixpath.dirname(remote_path) or "."
    binary = shlex.quote(posixpath.basename(remote_path))

    _, _, chmod_err = _exec(client, f"chmod a+x {binary}", remote_dir)
    if chmod_err:
        raise GalateaError(f"chmod failed: {chmod_err.strip()}")

    # Galatea keeps running after the session closes; its own output goes to a log file
    launch = f"nohup ./{binary} > {binary}.log 2>&1 < /dev/null &"
    _, _, exec_err = _exec(client, launch, remote_dir)
    if exec_err:
        raise GalateaError(f"execution failed: {exec_err.strip()}")
    logger.info(f"Galatea started at {remote_path}")


def activate_galatea_for_ssh_device(
    ssh_config: Dict[str, Any],
    remote_path: Optional[str] = None
) -> None:
    """
    Start Galatea on a device, uploading it first if it is not there.

    Args:
        ssh_config: host, port, username and password and/or privateKey
        remote_path: Where the binary lives on the device

    Raises:
        GalateaError: If upload, chmod or launch fails
        paramiko.SSHException: On connection failures
    """
    remote_path = remote_path or DEFAULT_GALATEA_PATH
    remote_dir = posixpath.dirname(remote_path) or "."
    binary = shlex.quote(posixpath.basename(remote_path))

    client = _connect(ssh_config)
    try:
        exit_status, _, _ = _exec(client, f"test -f {binary}", remote_dir)
        if exit_status != 0:
            logger.info(f"Galatea not found at {remote_path} on {ssh_config['host']}, uploading")
            client.close()
            upload_galatea_to_ssh_device(ssh_config, remote_path)
            return
        _start_galatea(client, remote_path)
    finally:
        client.close()


def _download_release(release_url: str, destination) -> None:
    with httpx.stream("GET", release_url, follow_redirects=True, timeout=DOWNLOAD_TIMEOUT_SECONDS) as response:
        if response.is_error:
            raise GalateaError(f"Failed to download galatea: {response.status_code}")
        for chunk in response.iter_bytes():
            destination.write(chunk)
    destination.flush()


def upload_galatea_to_ssh_device(
    ssh_config: Dict[str, Any],
    remote_path: Optional[str] = None
) -> None:
    """
    Download the Galatea release, upload it to the device and start it.

    Raises:
        GalateaError: If GALATEA_RELEASE is unset, the download fails, or it will not start
    """
    remote_path = remote_path or DEFAULT_GALATEA_PATH
    release_url = get_galatea_release()
    if not release_url:
        raise GalateaError("GALATEA_RELEASE is not set")

    with tempfile.NamedTemporaryFile(prefix="galatea-") as local_file:
        _download_release(release_url, local_file)

        client = _connect(ssh_config)
        try:
            sftp = client.open_sftp()
            try:
                sftp.put(local_file.name, remote_path)
            finally:
                sftp.close()
            logger.info(f"Uploaded galatea to {ssh_config['host']}:{remote_path}")
            _start_galatea(client, remote_path)
        finally:
            client.close()
