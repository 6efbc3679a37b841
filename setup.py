from setuptools import setup

setup(
    name = 'eckeygen',
    version = '0.1',

    # Info
    description = 'ECDSA NIST P-384 key pair generator with PEM round trip verification',
    keywords = ['ecdsa', 'pem', 'keys'],

    # Package
    packages=['eckeygen'],
    include_package_data=True,
    install_requires=[
        'ecdsa>=0.18',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['eckeygen=eckeygen.generate_keys:main'],
    },

    # Tests
    test_suite='tests',
)
