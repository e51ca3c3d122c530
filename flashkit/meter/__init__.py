"""Meters that accumulate running statistics during training and evaluation."""