import setuptools

# read the contents of your README file
from pathlib import Path
long_description = (Path(__file__).parent/"README.md").read_text()


setuptools.setup(
    name="wot-adapter",
    version="0.1.0",
    description="Mirror Web of Things consumed things as local devices of a gateway, with remote properties, actions and events kept in sync.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=[
        'wot_adapter',
        'wot_adapter.client',
        'wot_adapter.core',
        'wot_adapter.schema_validators',
        'wot_adapter.td'
    ],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Manufacturing", 
        "Topic :: Home Automation",
        "Topic :: System :: Hardware",
        "Development Status :: 3 - Alpha"
    ],    
    python_requires='>=3.11',
    install_requires=[
        "msgspec>=0.18.6",
        "jsonschema>=4.22.0",
        "pydantic>=2.8.0"
    ],
    license="BSD-3-Clause",
    keywords=["Web of Things", "Thing Description", "IoT gateway", "device adapter"]
)
