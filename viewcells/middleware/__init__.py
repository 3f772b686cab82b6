"""viewcells middleware"""
