from setuptools import setup

setup(
    name="cec_bridge",
    version="0.1.0",
    description="Turns cec-client output into CEC events and CEC intents into cec-client commands",
    author="Rosen Kolev",
    author_email="rosen.kolev@hotmail.com",
    python_requires=">=3.10",
    py_modules=[],
    install_requires=[],
    extras_require={
        "keyboard": ["python-uinput"],
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "cec-bridge = cec_bridge.main:main",  # This creates a CLI command
        ],
    },
    packages=["cec_bridge"],
    include_package_data=True,
)
