#!/usr/bin/env python
from setuptools import setup

setup(
    name='pinwire',
    version='0.1.0',
    description='Pinentry program speaking the stdio Assuan protocol',
    license='MIT',
    packages=['pinwire', 'pinwire.assuan'],
    install_requires=[],
    extras_require={
        'test': ['pytest', 'mock'],
        'completion': ['argcomplete'],
    },
    platforms=['POSIX'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: End Users/Desktop',
        'License :: OSI Approved :: MIT License',
        'Operating System :: POSIX',
        'Programming Language :: Python :: 3',
        'Topic :: Security :: Cryptography',
        'Topic :: Utilities',
    ],
    entry_points={'console_scripts': ['pinwire = pinwire.__main__:_main']},
)
