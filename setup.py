from pathlib import Path
from setuptools import setup, find_packages

__version__ = "1.0.0"

try:
    install_requires = [
        line.strip()
        for line in Path(__file__).with_name("requirements.txt").read_text().splitlines()
        if line.strip() and not line.startswith("#")
    ]
except FileNotFoundError:
    install_requires = [
        "rich",
        "pyyaml",
        "pydantic>=2.0",
        "art",
    ]


setup(
    name="valkey-fips",
    version=__version__,
    description="FIPS 140-3 startup validation for Valkey containers built on OpenSSL 3 and wolfProvider.",
    classifiers=[
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    zip_safe=False,
    include_package_data=True,
    package_data={"valkeyfips": ["config/*.yaml"]},
    install_requires=install_requires,
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "valkey-fips=valkeyfips.cli.__main__:main",
            "fips-entrypoint=valkeyfips.cli.__main__:entrypoint_main",
        ],
    },
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    long_description="""
# Valkey FIPS

Startup validation for Valkey container images that run on a FIPS 140-3
validated wolfSSL module through OpenSSL 3 and wolfProvider.

The container ENTRYPOINT runs an ordered checklist and only hands control to
the Bitnami Valkey entrypoint when every step passes. Any failure stops the
container with exit code 1.

1. Operating environment (architecture, CPU features)
2. FIPS environment variables
3. OpenSSL installation
4. wolfSSL library
5. wolfProvider module
6. wolfProvider loaded by OpenSSL
7. Crypto library integrity (SHA-256 and hardlinks against the FIPS OpenSSL build)
8. Cryptographic FIPS self-test (skip with `SKIP_FIPS_CHECK=true`)

## Usage

```sh
VALKEY_FIPS_VARIANT=custom-openssl fips-entrypoint valkey-server --port 6379
valkey-fips check --variant ubuntu-system-openssl --json-file report.json
valkey-fips info
valkey-fips generate --variant custom-openssl -o /etc/valkey-fips/config.yaml
```
    """,
    long_description_content_type="text/markdown",
)
