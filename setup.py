"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='logolab',
	version='0.1.0',
	packages=['logolab', "logolab.adapters", ],
	entry_points={
		'console_scripts': ["logolab = logolab.cmdline:main"],
	},
	license='MIT',
	description='A turtle-graphics Logo interpreter for people learning to program',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.11",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Education",
		"Environment :: Console",
    ],
	python_requires='>=3.11',
	install_requires=[
		"pygame>=2.4.0",
	]
)
