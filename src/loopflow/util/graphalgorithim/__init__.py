"""
Graph algorithm helpers.

- nxadapter: conversion of CFGs and loop forests to networkx graphs
"""
