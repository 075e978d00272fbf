import setuptools
import os

# Load version string
loaded_vars = dict()
with open(os.path.join(os.path.dirname(__file__), 'calibtarget', 'version.py')) as fv:
    exec(fv.read(), loaded_vars)

setuptools.setup(
    name="calibtarget",
    version=loaded_vars['__version__'],
    author="snototter",
    author_email="snototter@users.noreply.github.com",
    description="Render, preview and export camera calibration targets.",
    url="https://github.com/snototter/pycamcalib",
    packages=setuptools.find_packages(include=['calibtarget', 'calibtarget.*']),
    install_requires=[
        'numpy',
        'Pillow>=10.1',
        'reportlab',
        'svglib',
        'svgwrite',
        'opencv-python-headless>=4.7',
        'PySide6>=6.4',
        'qimage2ndarray',
        'toml',
        'vito'
    ],
    extras_require={
        'test': ['pytest']
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.8',
)
