# -*- coding: utf-8 -*-
import ast
import re

from setuptools import find_packages, setup

_version_re = re.compile(r'__version__\s+=\s+(.*)')

with open('src/marathon_deploy/__init__.py', 'rb') as f:
    version = str(ast.literal_eval(_version_re.search(
        f.read().decode('utf-8')).group(1)))

install_requires = [
    'requests',
    'urllib3',
]

tests_require = [
    'mock',
    'pytest',
]

setup(
    name='marathon-deploy',
    version=version,
    description="Deploy Marathon application definitions from CI builds.",
    keywords='marathon mesos dcos deployment ci',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    zip_safe=False,
    license='Apache License, Version 2.0',
    include_package_data=True,
    python_requires='>=3.6',
    install_requires=install_requires,
    extras_require={'test': tests_require},
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: Apache Software License',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Build Tools'
    ],
)
