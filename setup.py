"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='minnow-lang',
	version='0.1.0',
	packages=['minnow'],
	entry_points={
		'console_scripts': ["minnow = minnow.cmdline:main"],
	},
	license='MIT',
	description='Front-end for Minnow, a tiny typed expression language with Hindley-Milner inference',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Compilers",
		"Topic :: Education",
		"Environment :: Console",
    ],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
