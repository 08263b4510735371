from glob import glob
from setuptools import setup


setup(
    name='rpn-calculator',
    use_scm_version={
        # Building outside a git checkout
        'fallback_version': '1.0.0',
    },
    description='Reverse Polish Notation (RPN) calculator',
    python_requires='>=3.8',
    install_requires=[
        'regex',
        'prompt_toolkit>=3.0.29',
    ],
    packages=['rpn_calculator'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    setup_requires=[
        'setuptools_scm',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
